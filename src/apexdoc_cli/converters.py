from apexdoc_formatter.models import FormatResult, FormatterConfig
from apexdoc_formatter.names import TableNormalizer

from .models import FileReport, FileStatus, FormatSettings


def settings_to_config(settings: FormatSettings) -> FormatterConfig:
    """Convert external Pydantic settings to the internal formatter config"""
    return FormatterConfig(
        print_width=settings.print_width,
        tab_width=settings.tab_width,
        use_tabs=settings.use_tabs,
        format_code=settings.format_code,
    )


def settings_to_normalizer(settings: FormatSettings) -> TableNormalizer:
    normalizer = TableNormalizer.default()
    return normalizer.extend(settings.names) if settings.names else normalizer


def result_to_report(result: FormatResult, check: bool = False) -> FileReport:
    """Convert an internal dataclass result to an external Pydantic report"""
    if result.errors:
        status = FileStatus.ERROR
    elif result.modified:
        status = FileStatus.WOULD_REFORMAT if check else FileStatus.FORMATTED
    else:
        status = FileStatus.UNCHANGED
    return FileReport(file_path=result.file_path, status=status, errors=list(result.errors))

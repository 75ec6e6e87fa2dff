import traceback
from pathlib import Path
from typing import List, Union

from .logging import get_logger
from .models import FormatResult, FormatResults, FormatterConfig
from .rules.base import FormattingContext, FormattingRule, apply_transformations
from .rules.doc_comments import DocCommentRule

logger = get_logger("engine")


class FormatterEngine:
    """Applies documentation comment rules to Apex source files."""

    def __init__(self, config: FormatterConfig):
        self.config = config.validate()
        self.rules: List[FormattingRule] = []

    def add_rule(self, rule: FormattingRule) -> None:
        """Register a new formatting rule."""
        self.rules.append(rule)

    def add_default_rules(self) -> None:
        self.add_rule(DocCommentRule(self.config))

    def format_string(self, source: str, file_path: str = "") -> FormatResult:
        """Runs every rule over `source`, one after another."""
        normalized = source.replace("\r\n", "\n")
        current_source = normalized
        errors = []

        try:
            for rule in self.rules:
                context = FormattingContext(source=current_source, file_path=file_path)
                transforms = rule.analyze(context)
                if transforms:
                    current_source = apply_transformations(current_source, transforms)
        except Exception as e:
            logger.warning("Formatting %s failed: %s", file_path or "<string>", e)
            errors.append(f"{str(e)}\n{traceback.format_exc()}")
            return FormatResult(source=source, modified=False, errors=errors, file_path=file_path)

        return FormatResult(
            source=current_source,
            modified=current_source != source,
            errors=errors,
            file_path=file_path,
        )

    def format_file(self, file_path: Union[str, Path], write: bool = True) -> FormatResult:
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", path, e)
            return FormatResult(source="", modified=False, errors=[str(e)], file_path=str(path))

        result = self.format_string(source, str(path))
        if result.modified and write and not result.errors:
            path.write_text(result.source, encoding="utf-8")
            logger.info("Formatted %s", path)
        return result

    def format_files(self, files: List[Union[str, Path]], write: bool = True) -> FormatResults:
        """Batch format multiple files on disk."""
        results = []; modified_count = 0; error_count = 0
        for file_path in files:
            result = self.format_file(file_path, write=write)
            results.append(result)
            if result.errors: error_count += 1
            elif result.modified: modified_count += 1
        return FormatResults(
            results=results,
            total_files=len(files),
            modified_files=modified_count,
            error_files=error_count,
        )

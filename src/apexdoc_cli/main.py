from pathlib import Path
from typing import Optional

import typer
from apexdoc_formatter.engine import FormatterEngine
from apexdoc_formatter.errors import ConfigurationError
from apexdoc_formatter.logging import configure_logging
from apexdoc_formatter.pipeline import DocCommentFormatter
from apexdoc_formatter.rules.doc_comments import DocCommentRule

from .config import FormatConfig
from .converters import result_to_report, settings_to_config, settings_to_normalizer
from .models import FileStatus, FormatSettings

app = typer.Typer(help="ApexDoc Formatter - Normalize documentation comments in Apex source files")


def _load_settings(config_file: Path, **overrides) -> FormatSettings:
    try:
        return FormatConfig(config_file).settings(**overrides)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


@app.command("format")
def format_command(
    files: list[Path] = typer.Argument(..., help="Files to format"),
    check: bool = typer.Option(False, help="Report files that would change without writing them"),
    config_file: Path = typer.Option(Path(".apexdoc-format.toml"), "--config", help="Path to config file"),
    print_width: Optional[int] = typer.Option(None, help="Maximum line width"),
    tab_width: Optional[int] = typer.Option(None, help="Columns per indentation level"),
    use_tabs: Optional[bool] = typer.Option(None, "--use-tabs/--no-use-tabs", help="Indent with tabs"),
    format_code: Optional[bool] = typer.Option(
        None, "--format-code/--no-format-code", help="Lay out {@code} blocks"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """Format documentation comments in Apex files"""
    configure_logging(verbose=verbose)
    settings = _load_settings(
        config_file,
        print_width=print_width,
        tab_width=tab_width,
        use_tabs=use_tabs,
        format_code=format_code,
    )
    config = settings_to_config(settings)
    engine = FormatterEngine(config)
    formatter = DocCommentFormatter(config, normalizer=settings_to_normalizer(settings))
    engine.add_rule(DocCommentRule(config, formatter))

    results = engine.format_files(files, write=not check)
    reports = [result_to_report(r, check=check) for r in results.results]

    for report in reports:
        if report.status == FileStatus.ERROR:
            typer.echo(f"ERROR: {report.file_path} - {report.errors[0].splitlines()[0]}")
        elif report.status == FileStatus.WOULD_REFORMAT:
            typer.echo(f"Would reformat {report.file_path}")
        elif report.status == FileStatus.FORMATTED:
            typer.echo(f"Formatted {report.file_path}")

    if check:
        typer.echo(
            f"\n{results.modified_files} of {results.total_files} files would be reformatted"
        )
    else:
        typer.echo(f"\n{results.modified_files} of {results.total_files} files reformatted")

    if results.error_files or (check and results.modified_files):
        raise typer.Exit(code=1)


@app.command()
def comment(
    indent: int = typer.Option(0, help="Column of the comment's opening marker"),
    config_file: Path = typer.Option(Path(".apexdoc-format.toml"), "--config", help="Path to config file"),
    print_width: Optional[int] = typer.Option(None, help="Maximum line width"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """Format one documentation comment read from stdin"""
    configure_logging(verbose=verbose)
    settings = _load_settings(config_file, print_width=print_width)
    config = settings_to_config(settings)
    formatter = DocCommentFormatter(config, normalizer=settings_to_normalizer(settings))

    text = typer.get_text_stream("stdin").read().strip()
    if not text:
        typer.echo("Error: no comment on stdin", err=True)
        raise typer.Exit(code=1)
    typer.echo(formatter.format_comment(text, base_indent=indent))


if __name__ == "__main__":
    app()

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from freezed_go_style import __version__
from freezed_go_style.exceptions import ConfigError
from freezed_go_style.formatter import DartFormatter
from freezed_go_style.logging_config import logger, setup_logging
from freezed_go_style.schemas import FormatSummary
from freezed_go_style.user_config import UserConfig

app = typer.Typer(
    help="Formats Freezed models marked with @FreezedGoStyle in Go-style.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool):
    if value:
        typer.echo(f"freezed_go_style version: {__version__}")
        raise typer.Exit()


@app.callback()
def global_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the tool version.",
    ),
):
    """
    Aligns annotations, types and names of Freezed factory constructors.

    Examples:
      freezed-go-style format -f lib/models/user.dart
      freezed-go-style format -d lib/models/
      freezed-go-style format lib/models/user.dart
    """


def _load_formatter() -> DartFormatter:
    try:
        return DartFormatter(UserConfig())
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _print_summary(summary: FormatSummary, verbose: bool) -> None:
    if verbose:
        table = Table(title="freezed-go-style")
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Status", style="green")
        table.add_column("Aligned", justify="right", style="magenta")
        table.add_column("Skipped", justify="right", style="yellow")

        for result in summary.results:
            if result.error:
                status = f"[red]error: {result.error}[/]"
            elif result.changed:
                status = "formatted"
            else:
                status = "unchanged"
            table.add_row(result.path, status, str(result.constructors_formatted), str(result.constructors_skipped))

        console.print(table)

    if summary.files_changed > 0 or verbose:
        console.print(f"Formatted {summary.files_changed} file(s).")
    else:
        logger.info("No files were formatted.")


@app.command("format")
def format_command(
    path: Optional[Path] = typer.Argument(None, help="File or directory to format."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="File path to format."),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory to format (recursively)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the decision trace."),
    json_output: bool = typer.Option(False, "--json", help="Output the run summary as JSON."),
):
    """
    Formats one file or every Dart file below a directory.
    """
    if verbose:
        setup_logging(level="DEBUG", suppress_console=False, force=True)

    given = [p for p in (file, directory, path) if p is not None]
    if not given:
        typer.echo("Error: No file or directory specified.", err=True)
        raise typer.Exit(code=1)
    if len(given) > 1:
        raise typer.BadParameter("Specify only one of --file, --dir or PATH.")

    target = given[0].absolute()
    logger.debug(f"Target path: {given[0]} -> {target}")

    if file is not None and not target.is_file():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(code=1)
    if directory is not None and not target.is_dir():
        typer.echo(f"Error: Directory not found: {directory}", err=True)
        raise typer.Exit(code=1)
    if not target.exists():
        typer.echo(f"Error: File or directory not found: {given[0]}", err=True)
        raise typer.Exit(code=1)

    formatter = _load_formatter()
    summary = formatter.format_path(target)

    if json_output:
        typer.echo(json.dumps(summary.model_dump(), indent=2))
        return

    _print_summary(summary, verbose)


@app.command()
def watch(
    directory: Path = typer.Argument(
        ..., help="Directory to watch.", exists=True, file_okay=False, readable=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the decision trace."),
):
    """
    Formats marked Dart files below a directory whenever they are saved.
    """
    from freezed_go_style.watcher import run_watcher

    if verbose:
        setup_logging(level="DEBUG", suppress_console=False, force=True)

    handler = run_watcher(directory, _load_formatter())
    console.print(f"Formatted {handler.files_formatted} file(s) while watching.")


def main():
    app()


if __name__ == "__main__":
    main()

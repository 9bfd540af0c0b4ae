# src/csv2json/cli.py
"""csv2json Command Line Interface.

Entry point for the csv2json CLI tool.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from csv2json import __version__
from csv2json.contracts.enums import Separator
from csv2json.contracts.errors import ConfigError, PipelineAbortedError

__all__ = ["app"]

# Input files must carry this extension
CSV_EXTENSION = ".csv"

app = typer.Typer(
    name="csv2json",
    help="csv2json: stream delimited files into JSON arrays.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"csv2json version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            _fail(f".env file not found: {env_file}")
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)  # Don't override existing env vars


def _fail(message: str) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    typer.secho(f"error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _check_input_file(path: Path) -> None:
    """Reject inputs that are not existing .csv files."""
    if path.suffix.lower() != CSV_EXTENSION:
        _fail(f"file {path} is not CSV")
    if not path.exists():
        _fail(f"file {path} does not exist")
    if not path.is_file():
        _fail(f"{path} is not a regular file")


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # We handle existence check ourselves for better error message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """csv2json: stream delimited files into JSON arrays."""
    from csv2json.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def convert(
    csv_file: Path = typer.Argument(
        ...,
        help="Delimited input file; the JSON output is written next to it.",
    ),
    separator: Separator | None = typer.Option(
        None,
        "--separator",
        help="Column separator (default: comma).",
        case_sensitive=False,
    ),
    pretty: bool | None = typer.Option(
        None,
        "--pretty/--compact",
        help="Generate pretty (tab-indented) or compact JSON.",
    ),
    sort_keys: bool | None = typer.Option(
        None,
        "--sort-keys/--header-order",
        help="Sort object keys alphabetically instead of keeping header order.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Optional settings file (YAML/TOML/JSON). CSV2JSON_* env vars also apply.",
    ),
) -> None:
    """Convert a delimited file to JSON.

    Examples:

        # Compact output, comma separated input
        csv2json convert data/people.csv

        # Semicolon separated input, pretty output
        csv2json convert data/people.csv --separator semicolon --pretty
    """
    from csv2json.core.config import load_settings
    from csv2json.engine.coordinator import PipelineCoordinator
    from csv2json.plugins.diagnostics import LoggingDiagnostics

    _check_input_file(csv_file)

    try:
        config = load_settings(settings, separator=separator, pretty=pretty, sort_keys=sort_keys)
    except FileNotFoundError:
        _fail(f"settings file not found: {settings}")
    except ConfigError as e:
        _fail(str(e))

    coordinator = PipelineCoordinator(csv_file, config, LoggingDiagnostics())

    typer.echo("Writing JSON file...")
    try:
        result = coordinator.run()
    except PipelineAbortedError as e:
        _fail(str(e.cause))

    typer.echo(f"Completed! {result.records_written} records written to {result.destination}")
    if result.rows_skipped:
        typer.echo(f"Skipped {result.rows_skipped} malformed rows (see log for details)")

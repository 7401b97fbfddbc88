"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pypimirror`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from pypimirror import __version__
from pypimirror.cli.commands._common import err_console
from pypimirror.cli.commands.create import create_cmd
from pypimirror.cli.commands.download import download_cmd
from pypimirror.cli.commands.list_cmd import list_cmd
from pypimirror.cli.commands.query import query_cmd
from pypimirror.cli.commands.write_metadata import write_metadata_cmd
from pypimirror.config import settings

app = typer.Typer(
    name="pypimirror",
    help="Build a self-hosted Python package index from downloaded archives.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="download", help="Download packages with pip.")(download_cmd)
app.command(name="list", help="List downloaded packages.")(list_cmd)
app.command(name="create", help="Create the mirror.")(create_cmd)
app.command(name="write-metadata", help="Write metadata files beside archives.")(
    write_metadata_cmd
)
app.command(name="query", help="Query an index for package versions.")(query_cmd)


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pypimirror {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """pypimirror: package mirror builder."""
    configure_logging(log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

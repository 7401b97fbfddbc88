"""``pypimirror list`` — show the distributions of a download directory.

One entry per distribution name, with its versions newest first.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from pypimirror.cli.commands._common import abort, build_catalog, console, report_failures
from pypimirror.config import settings
from pypimirror.core.errors import MirrorError


def list_cmd(
    download_dir: Path = typer.Option(
        settings.download_dir,
        "--download-dir",
        "-d",
        help="Directory holding the downloaded archives.",
    ),
    name_only: bool = typer.Option(
        False,
        "--name-only",
        help="List only the names of the packages.",
    ),
    name: str = typer.Option(
        "",
        "--name",
        help="List only the versions of NAME.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="JSON output.",
    ),
    use_norm_name: bool = typer.Option(
        False,
        "--use-norm-name",
        help="Use the normalized name instead of the regular name.",
    ),
    workers: int = typer.Option(
        settings.workers,
        "--workers",
        "-w",
        min=1,
        help="Number of archives inspected in parallel.",
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        "-k",
        help="Skip archives that cannot be read instead of stopping.",
    ),
) -> None:
    """List downloaded packages and their versions."""
    catalog = build_catalog(workers, keep_going)
    try:
        result = catalog.scan(download_dir)
    except MirrorError as exc:
        raise abort(exc) from exc

    listings = catalog.listing(result.artifacts, use_norm_name=use_norm_name)
    if name:
        listings = [entry for entry in listings if entry.name == name]

    report_failures(result)
    if as_json:
        typer.echo(json.dumps([entry.model_dump() for entry in listings]))
        return

    if not listings:
        console.print("[dim]No packages found.[/dim]")
        return

    if name_only and not name:
        for entry in listings:
            typer.echo(entry.name)
        return

    table = Table(title=f"Packages in {download_dir}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Versions (newest first)", style="green")
    for entry in listings:
        table.add_row(entry.name, ", ".join(entry.versions))
    console.print(table)

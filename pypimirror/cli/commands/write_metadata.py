"""``pypimirror write-metadata`` — cache archive metadata in sidecar files."""

from __future__ import annotations

from pathlib import Path

import typer

from pypimirror.cli.commands._common import abort, build_catalog, console, report_failures
from pypimirror.config import settings
from pypimirror.core.errors import MirrorError


def write_metadata_cmd(
    download_dir: Path = typer.Option(
        settings.download_dir,
        "--download-dir",
        "-d",
        help="Directory holding the downloaded archives.",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Delete existing metadata files and recompute them.",
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
    """Write a .metadata.json file beside every archive."""
    catalog = build_catalog(workers, keep_going)
    try:
        result = catalog.write_sidecars(download_dir, overwrite=overwrite)
    except MirrorError as exc:
        raise abort(exc) from exc

    report_failures(result)
    console.print(
        f"[bold green]Metadata cached[/bold green] for {len(result.artifacts)} archive(s)",
        highlight=False,
    )

"""``pypimirror create`` — assemble the mirror from a download directory.

Every distribution gets its own directory holding links (or copies) of its
archives and an ``index.html``; a root ``index.html`` links them all.
"""

from __future__ import annotations

from pathlib import Path

import typer

from pypimirror.cli.commands._common import abort, build_catalog, console, report_failures
from pypimirror.config import settings
from pypimirror.core.assembler import MirrorAssembler
from pypimirror.core.errors import MirrorError
from pypimirror.models.catalog import LinkMode


def create_cmd(
    download_dir: Path = typer.Option(
        settings.download_dir,
        "--download-dir",
        "-d",
        help="Directory holding the downloaded archives.",
    ),
    mirror_dir: Path = typer.Option(
        settings.mirror_dir,
        "--mirror-dir",
        "-m",
        help="Directory the mirror is written to.",
    ),
    copy: bool = typer.Option(
        settings.copy_files,
        "--copy/--symlink",
        help="Copy archives instead of symlinking them.",
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
    """Create or update the mirror."""
    catalog = build_catalog(workers, keep_going)
    assembler = MirrorAssembler(link_mode=LinkMode.COPY if copy else LinkMode.SYMLINK)
    try:
        result = catalog.scan(download_dir, fix=False)
        report = assembler.assemble(result.artifacts, mirror_dir)
    except MirrorError as exc:
        raise abort(exc) from exc

    report_failures(result)
    console.print(
        f"[bold green]Mirror ready:[/bold green] {report.mirror_dir} "
        f"({len(report.groups)} distribution(s), {report.placed} file(s))",
        highlight=False,
    )

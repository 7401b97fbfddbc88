"""Helpers shared by the CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console

from pypimirror.config import settings
from pypimirror.core.catalog import PackageCatalog
from pypimirror.core.errors import MirrorError
from pypimirror.models.catalog import ScanResult

console = Console()
err_console = Console(stderr=True)


def build_catalog(workers: int | None = None, keep_going: bool = False) -> PackageCatalog:
    return PackageCatalog(
        workers=workers or settings.workers,
        fail_fast=settings.fail_fast and not keep_going,
    )


def abort(exc: MirrorError) -> typer.Exit:
    """Print *exc* and return the exit to raise."""
    err_console.print(f"[bold red]Error:[/bold red] {exc}", highlight=False)
    return typer.Exit(code=1)


def report_failures(result: ScanResult) -> None:
    """Summarize skipped artifacts of a collect-and-continue scan."""
    if result.ok:
        return
    err_console.print(
        f"[yellow]Skipped {len(result.failures)} artifact(s):[/yellow]", highlight=False
    )
    for failure in result.failures:
        err_console.print(f"  [dim]{failure.path}[/dim]: {failure.error}", highlight=False)

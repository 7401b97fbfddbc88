"""``pypimirror query PKG`` — list the released versions of a package."""

from __future__ import annotations

import json
from enum import Enum

import typer

from pypimirror.cli.commands._common import abort
from pypimirror.config import settings
from pypimirror.core.errors import MirrorError
from pypimirror.core.query import ReleaseQuery


class OutputFormat(str, Enum):
    ONELINE = "oneline"
    JSON = "json"


def query_cmd(
    package: str = typer.Argument(
        ...,
        help="Name of the package to query.",
    ),
    constraints: str = typer.Option(
        "",
        "--constraints",
        "-c",
        help="Version constraints, e.g. '>=1.0,<2'.",
    ),
    latest: int = typer.Option(
        0,
        "--latest",
        "-n",
        min=0,
        help="List only the latest N versions.",
    ),
    url: str = typer.Option(
        settings.query_url,
        "--url",
        help="Index URL template; {name} is replaced by the package name.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.ONELINE,
        "--format",
        "-f",
        help="Output format.",
        case_sensitive=False,
    ),
) -> None:
    """Query an index for the available versions of a package."""
    try:
        with ReleaseQuery(url, timeout=settings.query_timeout) as query:
            versions = query.versions(package, constraints=constraints, latest=latest)
    except MirrorError as exc:
        raise abort(exc) from exc

    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(versions))
    else:
        for version in versions:
            typer.echo(version)

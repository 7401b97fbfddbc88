"""``pypimirror download`` — fetch packages with pip, then cache metadata.

Source distributions only, unless ``--allow-binary`` is given.  Any of
``--platform``, ``--python-version``, ``--implementation`` or ``--abi``
restricts the download to wheels, as pip requires.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from pypimirror.cli.commands._common import abort, build_catalog, console, report_failures
from pypimirror.config import settings
from pypimirror.core.downloader import PipDownloader
from pypimirror.core.errors import MirrorError
from pypimirror.models.download import DownloadRequest


def download_cmd(
    packages: Optional[list[str]] = typer.Argument(
        None,
        help="Requirement specifiers of the packages to download.",
    ),
    requirements: Optional[list[Path]] = typer.Option(
        None,
        "--requirements",
        "-r",
        help="Requirements file (repeatable).",
    ),
    download_dir: Path = typer.Option(
        settings.download_dir,
        "--download-dir",
        "-d",
        help="Download directory.",
    ),
    index_url: str = typer.Option(
        settings.index_url,
        "--index-url",
        help="Index URL.",
    ),
    proxy: str = typer.Option(
        settings.proxy,
        "--proxy",
        help="Proxy address in the form [user:passwd@]proxy.server:port.",
    ),
    allow_binary: bool = typer.Option(
        False,
        "--allow-binary",
        help="Allow binary distributions (wheels).",
    ),
    platforms: Optional[list[str]] = typer.Option(
        None,
        "--platform",
        help="Target platform tag (repeatable).",
    ),
    python_version: str = typer.Option(
        "",
        "--python-version",
        help="Target Python version.",
    ),
    implementation: str = typer.Option(
        "",
        "--implementation",
        help="Target Python implementation.",
    ),
    abis: Optional[list[str]] = typer.Option(
        None,
        "--abi",
        help="Target Python ABI (repeatable).",
    ),
    no_build_isolation: bool = typer.Option(
        False,
        "--no-build-isolation",
        help="Disable isolation when building.",
    ),
    pip: str = typer.Option(
        settings.pip,
        "--pip",
        help="pip executable.",
    ),
) -> None:
    """Download packages into the download directory."""
    request = DownloadRequest(
        packages=packages or [],
        requirements=requirements or [],
        dest=download_dir,
        index_url=index_url,
        proxy=proxy,
        allow_binary=allow_binary,
        platforms=platforms or [],
        python_version=python_version,
        implementation=implementation,
        abis=abis or [],
        no_build_isolation=no_build_isolation,
    )
    downloader = PipDownloader(pip=pip, catalog=build_catalog())
    try:
        result = downloader.download(request)
    except MirrorError as exc:
        raise abort(exc) from exc

    report_failures(result)
    console.print(
        f"[bold green]Downloaded:[/bold green] {len(result.artifacts)} archive(s) "
        f"in {download_dir}",
        highlight=False,
    )

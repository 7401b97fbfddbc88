"""``pip download`` wrapper that fills a download directory.

The downloader is an external tool: its only contract is that, on success,
the destination directory holds zero or more new archives.  Sidecars are
written for the directory afterwards.
"""

from __future__ import annotations

import logging
import subprocess

from pypimirror.core.catalog import PackageCatalog
from pypimirror.core.errors import DownloadError
from pypimirror.models.catalog import ScanResult
from pypimirror.models.download import DownloadRequest

logger = logging.getLogger(__name__)


class PipDownloader:
    """Runs ``pip download`` for a ``DownloadRequest``.

    Parameters
    ----------
    pip:
        The pip executable.
    catalog:
        Catalog used to write sidecars once the download finished.
    """

    def __init__(self, pip: str = "pip3", catalog: PackageCatalog | None = None) -> None:
        self.pip = pip
        self.catalog = catalog or PackageCatalog()

    def build_args(self, request: DownloadRequest) -> list[str]:
        """Return the full command line for *request*."""
        if not request.packages and not request.requirements:
            raise DownloadError(
                "at least one requirements file or package must be specified"
            )
        args = [self.pip, "download", "-d", str(request.dest)]
        if request.index_url:
            args += ["--index-url", request.index_url]
        if request.proxy:
            args += ["--proxy", request.proxy]
        if not request.allow_binary:
            args += ["--no-binary", ":all:"]
        if request.constrains_binary:
            args += ["--only-binary", ":all:"]
        for platform in request.platforms:
            args += ["--platform", platform]
        if request.python_version:
            args += ["--python-version", request.python_version]
        if request.implementation:
            args += ["--implementation", request.implementation]
        if request.no_build_isolation:
            args.append("--no-build-isolation")
        for abi in request.abis:
            args += ["--abi", abi]
        for requirements in request.requirements:
            args += ["-r", str(requirements)]
        args += request.packages
        return args

    def download(self, request: DownloadRequest) -> ScanResult:
        """Run pip, then cache metadata for everything in the destination."""
        args = self.build_args(request)
        logger.info("Running %s", " ".join(args))
        try:
            subprocess.run(args, check=True)
        except FileNotFoundError as exc:
            raise DownloadError(f"pip executable {self.pip!r} not found") from exc
        except subprocess.CalledProcessError as exc:
            raise DownloadError(
                f"failure while executing {' '.join(args)!r}: exit status {exc.returncode}"
            ) from exc
        return self.catalog.write_sidecars(request.dest)

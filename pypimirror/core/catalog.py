"""Scanning a download directory into a catalog of artifacts.

Every regular file below the directory, except sidecars, is an artifact.
Files are visited in sorted path order and resolved either one at a time or
on a bounded thread pool; results are always collected in visiting order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from pypimirror.core.errors import ArtifactError
from pypimirror.core.ordering import (
    DEFAULT_COLLATOR,
    Collator,
    group_by_name,
    group_by_norm_name,
    group_by_version,
)
from pypimirror.core.reconciler import fix_names
from pypimirror.core.resolver import MetadataResolver
from pypimirror.core.sidecar import is_sidecar
from pypimirror.models.catalog import PackageListing, ScanFailure, ScanResult
from pypimirror.models.metadata import PackageArtifact

logger = logging.getLogger(__name__)


def iter_artifact_paths(directory: Path) -> Iterator[Path]:
    """Yield every non-sidecar file below *directory* in sorted order."""
    for path in sorted(Path(directory).rglob("*")):
        if path.is_file() and not is_sidecar(path):
            yield path


class PackageCatalog:
    """Resolves every artifact of a download directory.

    Parameters
    ----------
    resolver:
        Metadata resolver used per artifact.
    workers:
        Size of the resolution thread pool.  ``1`` resolves sequentially.
    fail_fast:
        Stop at the first failing artifact (in visiting order) by raising its
        ``ArtifactError``.  When ``False`` failures are logged, recorded on
        the ``ScanResult`` and the scan continues.
    collator:
        Name collator used for grouping.
    """

    def __init__(
        self,
        resolver: MetadataResolver | None = None,
        *,
        workers: int = 1,
        fail_fast: bool = True,
        collator: Collator = DEFAULT_COLLATOR,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.resolver = resolver or MetadataResolver()
        self.workers = workers
        self.fail_fast = fail_fast
        self.collator = collator

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self, directory: Path, *, fix: bool = True) -> ScanResult:
        """Resolve all artifacts below *directory*.

        With *fix*, names are reconciled per normalized-name group once the
        whole directory has been resolved.
        """
        paths = list(iter_artifact_paths(directory))
        logger.info("Scanning %d file(s) in %s", len(paths), directory)

        result = ScanResult()
        if self.workers == 1:
            self._collect(paths, (self._resolve_one(path) for path in paths), result)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                futures: list[Future[PackageArtifact | ArtifactError]] = [
                    pool.submit(self._resolve_one, path) for path in paths
                ]
                try:
                    self._collect(paths, (f.result() for f in futures), result)
                except ArtifactError:
                    for future in futures:
                        future.cancel()
                    raise

        if fix:
            for group in group_by_norm_name(result.artifacts, self.collator):
                fix_names(group.items)
        return result

    def _resolve_one(self, path: Path) -> PackageArtifact | ArtifactError:
        try:
            return self.resolver.artifact(path)
        except ArtifactError as exc:
            return exc

    def _collect(
        self,
        paths: list[Path],
        outcomes: Iterable[PackageArtifact | ArtifactError],
        result: ScanResult,
    ) -> None:
        # outcomes is consumed lazily, so fail-fast stops before later paths
        for path, outcome in zip(paths, outcomes):
            if isinstance(outcome, ArtifactError):
                if self.fail_fast:
                    raise outcome
                logger.error("Skipping %s: %s", path, outcome.cause)
                result.failures.append(ScanFailure(path=path, error=str(outcome.cause)))
            else:
                result.artifacts.append(outcome)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def listing(
        self, artifacts: list[PackageArtifact], *, use_norm_name: bool = False
    ) -> list[PackageListing]:
        """One entry per display-name group with versions newest first."""
        listings: list[PackageListing] = []
        for group in group_by_name(artifacts, self.collator):
            name = group.items[0].metadata.norm_name if use_norm_name else group.key
            versions = [g.key for g in reversed(group_by_version(group.items))]
            listings.append(PackageListing(name=name, versions=versions))
        return listings

    # ------------------------------------------------------------------
    # Sidecars
    # ------------------------------------------------------------------

    def write_sidecars(self, directory: Path, *, overwrite: bool = False) -> ScanResult:
        """Cache the metadata of every artifact below *directory* in sidecars.

        Names are reconciled before writing.  Existing sidecars are kept
        unless *overwrite* is set, in which case all of them are deleted
        before the scan.
        """
        sidecars = self.resolver.sidecars
        if overwrite:
            sidecars.purge(directory)
        result = self.scan(directory)
        written = 0
        for artifact in result.artifacts:
            if sidecars.exists(artifact.path):
                continue
            sidecars.store(artifact.path, artifact.metadata)
            written += 1
        logger.info("Wrote %d sidecar(s) in %s", written, directory)
        return result

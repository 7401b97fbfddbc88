"""Metadata resolution for a single artifact.

Resolution order:

1. A sidecar with a non-empty name is returned as-is (no extraction, no
   hashing).
2. Otherwise the archive format is detected from the filename and the
   format handler runs:

   * sdist-style tar/zip archives read ``<stem>/PKG-INFO`` and fall back to
     splitting the filename stem into ``<name>-<version>``;
   * wheels read ``<dist>-<version>.dist-info/METADATA`` and apply the
     homepage heuristic when the declared name does not prefix the filename.

3. The SHA-256 of the whole file is recorded on the result.
"""

from __future__ import annotations

import logging
import tarfile
import zipfile
import zlib
from pathlib import Path
from urllib.parse import urlsplit

from pypimirror.core.archive import ArchiveReader
from pypimirror.core.errors import (
    ArtifactError,
    InvalidArchiveName,
    MemberNotFound,
    MirrorError,
)
from pypimirror.core.hasher import sha256_file
from pypimirror.core.parser import MetadataParser
from pypimirror.core.sidecar import SidecarCache
from pypimirror.models.metadata import ArchiveFormat, PackageArtifact, PackageMetadata

logger = logging.getLogger(__name__)

SDIST_METADATA_MEMBER = "PKG-INFO"
WHEEL_METADATA_MEMBER = "METADATA"

# Failures that are annotated with the artifact path before propagating.
_EXTRACTION_ERRORS = (
    MirrorError,
    OSError,
    EOFError,
    ValueError,
    tarfile.TarError,
    zipfile.BadZipFile,
    zlib.error,
)


def homepage_name_candidate(homepage: str) -> str | None:
    """Guess a distribution name from a homepage URL path.

    ``https://github.com/Org/repo`` yields ``"Org"``: the leading slash is
    stripped and everything before the last remaining ``/`` is kept.
    Returns ``None`` when the path does not have that shape.
    """
    path = urlsplit(homepage).path
    if not path.startswith("/"):
        return None
    path = path[1:]
    head, sep, _ = path.rpartition("/")
    if not sep:
        return None
    return head


class MetadataResolver:
    """Produces the ``PackageMetadata`` of an artifact file.

    Parameters
    ----------
    parser:
        Description parser.  A default ``MetadataParser`` is used if omitted.
    reader:
        Archive member reader.
    sidecars:
        Sidecar cache consulted before extraction.  Pass ``use_cache=False``
        to ``resolve`` to bypass it.
    """

    def __init__(
        self,
        parser: MetadataParser | None = None,
        reader: ArchiveReader | None = None,
        sidecars: SidecarCache | None = None,
    ) -> None:
        self.parser = parser or MetadataParser()
        self.reader = reader or ArchiveReader()
        self.sidecars = sidecars or SidecarCache()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve(self, path: Path, *, use_cache: bool = True) -> PackageMetadata:
        """Return the metadata of *path*, annotating any failure with the path."""
        path = Path(path)
        try:
            if use_cache:
                cached = self.sidecars.load(path)
                if cached is not None:
                    logger.debug("Using cached metadata for %s", path)
                    return cached
            return self.extract(path)
        except _EXTRACTION_ERRORS as exc:
            raise ArtifactError(path, exc) from exc

    def artifact(self, path: Path, *, use_cache: bool = True) -> PackageArtifact:
        path = Path(path)
        return PackageArtifact(path=path, metadata=self.resolve(path, use_cache=use_cache))

    def extract(self, path: Path) -> PackageMetadata:
        """Run format-specific extraction and hash the file.

        Errors are raised unannotated; ``resolve`` adds the path.
        """
        path = Path(path)
        fmt = ArchiveFormat.detect(path.name)
        if fmt is ArchiveFormat.WHEEL:
            metadata = self._from_wheel(path)
        else:
            # TAR_GZ, TAR_BZ2 and ZIP share the sdist layout
            metadata = self._from_sdist(path, fmt)
        metadata.sha256 = sha256_file(path)
        return metadata

    # ------------------------------------------------------------------
    # Format handlers
    # ------------------------------------------------------------------

    def _from_sdist(self, path: Path, fmt: ArchiveFormat) -> PackageMetadata:
        stem = fmt.stem(path.name)
        member = f"{stem}/{SDIST_METADATA_MEMBER}"
        try:
            text = self.reader.read_member(path, member)
        except MemberNotFound:
            logger.debug("%s has no %s, inferring from filename", path.name, member)
            return self.parser.from_filename_stem(stem)
        return self.parser.parse(text)

    def _from_wheel(self, path: Path) -> PackageMetadata:
        filename = path.name
        components = filename.split("-", 2)
        if len(components) != 3:
            raise InvalidArchiveName(filename)
        distribution, version, _ = components
        member = f"{distribution}-{version}.dist-info/{WHEEL_METADATA_MEMBER}"
        metadata = self.parser.parse(self.reader.read_member(path, member))

        if not filename.startswith(metadata.name):
            metadata.trusted = False
            candidate = homepage_name_candidate(metadata.homepage)
            if candidate and filename.startswith(candidate):
                logger.debug(
                    "%s: using %r from homepage instead of declared name %r",
                    filename,
                    candidate,
                    metadata.name,
                )
                # norm_name stays derived from the declared name
                metadata.name = candidate
            else:
                logger.warning(
                    "%s: declared name %r does not match the filename and the "
                    "homepage %r gives no usable name; keeping it as untrusted",
                    filename,
                    metadata.name,
                    metadata.homepage,
                )
        return metadata

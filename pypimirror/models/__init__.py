"""pypimirror data models — Pydantic v2."""

from pypimirror.models.catalog import (
    LinkMode,
    MirrorReport,
    PackageListing,
    ScanFailure,
    ScanResult,
)
from pypimirror.models.download import DownloadRequest
from pypimirror.models.index import PackageIndexEntry, RootIndexEntry
from pypimirror.models.metadata import (
    ArchiveFormat,
    PackageArtifact,
    PackageMetadata,
    normalize,
)

__all__ = [
    # metadata
    "ArchiveFormat",
    "PackageArtifact",
    "PackageMetadata",
    "normalize",
    # index
    "PackageIndexEntry",
    "RootIndexEntry",
    # catalog
    "LinkMode",
    "MirrorReport",
    "PackageListing",
    "ScanFailure",
    "ScanResult",
    # download
    "DownloadRequest",
]

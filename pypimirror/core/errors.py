"""Error taxonomy for metadata extraction and mirror assembly.

Every error raised by the core derives from ``MirrorError``.  Extraction
errors are re-raised as ``ArtifactError`` carrying the offending artifact
path, so a batch run can report which file failed.
"""

from __future__ import annotations

from pathlib import Path


class MirrorError(RuntimeError):
    """Base class for all pypimirror errors."""


class InvalidMetadata(MirrorError):
    """A required field is absent from the package description text."""

    def __init__(self, field: str) -> None:
        super().__init__(f"invalid metadata: missing {field!r} field")
        self.field = field


class InvalidArchiveName(MirrorError):
    """The filename does not follow the naming convention of its format."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"invalid archive name: {filename!r}")
        self.filename = filename


class MemberNotFound(MirrorError):
    """The requested member does not exist inside the archive."""

    def __init__(self, archive: Path | str, member: str) -> None:
        super().__init__(f"member {member!r} not found in archive {str(archive)!r}")
        self.archive = Path(archive)
        self.member = member


class MetadataExtractionFailed(MirrorError):
    """Neither in-archive metadata nor the filename yield a name/version."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"failed to extract metadata from {filename!r}")
        self.filename = filename


class UnknownExtension(MirrorError):
    """No archive format recognizes the file."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"unknown extension: {filename!r}")
        self.filename = filename


class SidecarError(MirrorError):
    """A cached metadata sidecar exists but cannot be read or decoded."""


class ArtifactError(MirrorError):
    """Processing of one artifact failed.

    Parameters
    ----------
    path:
        The artifact being processed.
    cause:
        The underlying exception (also chained as ``__cause__``).
    """

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        super().__init__(f"error while processing {str(path)!r}: {cause}")
        self.path = Path(path)
        self.cause = cause


class MirrorAssemblyError(MirrorError):
    """Placing an artifact or writing an index into the mirror failed."""


class DownloadError(MirrorError):
    """The external package downloader failed."""


class QueryError(MirrorError):
    """Querying an index for the releases of a package failed."""

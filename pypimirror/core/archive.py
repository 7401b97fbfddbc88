"""Member extraction from tar, zip and wheel archives.

Tar archives are read as a stream: the codec is chosen from the immediate
extension (``.gz`` or ``.bz2``, raw otherwise) and entries are visited one by
one until the requested member is found.  Zip archives, wheels included, are
opened random-access and their directory is scanned linearly.

Members are matched by exact path equality, never by basename.
"""

from __future__ import annotations

import tarfile
import zipfile
from pathlib import Path

from pypimirror.core.errors import MemberNotFound
from pypimirror.models.metadata import ArchiveFormat

_TAR_STREAM_MODES: dict[str, str] = {
    ".gz": "r|gz",
    ".bz2": "r|bz2",
}


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class ArchiveReader:
    """Reads a single text member out of a package archive."""

    def read_member(self, path: Path, member: str) -> str:
        """Return the text content of *member* inside the archive at *path*.

        Raises ``MemberNotFound`` when the archive has no such member.  Any
        other I/O or codec error propagates unchanged.
        """
        path = Path(path)
        fmt = ArchiveFormat.detect(path.name)
        if fmt.is_tar:
            return self.read_tar_member(path, member)
        return self.read_zip_member(path, member)

    def read_tar_member(self, path: Path, member: str) -> str:
        mode = _TAR_STREAM_MODES.get(Path(path).suffix, "r|")
        with tarfile.open(path, mode=mode) as tar:
            for info in tar:
                if info.name != member:
                    continue
                fileobj = tar.extractfile(info)
                if fileobj is None:
                    # directories and special entries carry no content
                    raise MemberNotFound(path, member)
                return _decode(fileobj.read())
        raise MemberNotFound(path, member)

    def read_zip_member(self, path: Path, member: str) -> str:
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                if info.filename != member:
                    continue
                with archive.open(info) as fileobj:
                    return _decode(fileobj.read())
        raise MemberNotFound(path, member)

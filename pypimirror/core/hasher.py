"""Streaming SHA-256 digest of artifact files."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 1 << 16


def sha256_file(path: Path) -> str:
    """Return the lowercase SHA-256 hex digest of the whole file at *path*.

    The file is streamed in fixed-size chunks so large archives are never
    held in memory.
    """
    digest = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()

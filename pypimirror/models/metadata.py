"""Package metadata and artifact models."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_serializer, field_validator, model_validator

from pypimirror.core.errors import UnknownExtension

_SEPARATORS = re.compile(r"[-_.]+")


def normalize(name: str) -> str:
    """Collapse runs of ``-``, ``_`` and ``.`` to a single ``-`` and lower-case."""
    return _SEPARATORS.sub("-", name).lower()


class ArchiveFormat(str, Enum):
    """The closed set of archive formats a mirror can hold.

    The value is the filename suffix that identifies the format.
    """

    TAR_BZ2 = ".tar.bz2"
    TAR_GZ = ".tar.gz"
    ZIP = ".zip"
    WHEEL = ".whl"

    @property
    def suffix(self) -> str:
        return self.value

    @property
    def is_tar(self) -> bool:
        return self in (ArchiveFormat.TAR_BZ2, ArchiveFormat.TAR_GZ)

    @classmethod
    def detect(cls, filename: str) -> ArchiveFormat:
        """Return the format whose suffix matches *filename*.

        The longest matching suffix wins.  Raises ``UnknownExtension`` when
        no format matches.
        """
        matches = [fmt for fmt in cls if filename.endswith(fmt.suffix)]
        if not matches:
            raise UnknownExtension(filename)
        return max(matches, key=lambda fmt: len(fmt.suffix))

    def stem(self, filename: str) -> str:
        """Strip this format's suffix from *filename*."""
        return filename[: -len(self.suffix)]


class PackageMetadata(BaseModel):
    """Identity of one artifact: name, version, homepage and content digest.

    ``norm_name`` is derived from ``name`` when not given explicitly.  Only
    ``name`` is reassigned after creation, by name reconciliation.

    The field names match the sidecar JSON keys.
    """

    name: str
    norm_name: str = ""
    version: str
    homepage: str = ""
    trusted: bool = True
    sha256: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_norm_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("norm_name") and data.get("name"):
            data = {**data, "norm_name": normalize(data["name"])}
        return data

    @field_validator("sha256", mode="before")
    @classmethod
    def _empty_digest_is_none(cls, value: Any) -> Any:
        return value or None

    @field_validator("homepage", mode="before")
    @classmethod
    def _null_homepage_is_empty(cls, value: Any) -> Any:
        return value or ""

    @field_serializer("sha256")
    def _digest_as_text(self, value: str | None) -> str:
        return value or ""


class PackageArtifact(BaseModel):
    """One archive file on disk together with its metadata record."""

    path: Path
    metadata: PackageMetadata

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def norm_name(self) -> str:
        return self.metadata.norm_name

    @property
    def version(self) -> str:
        return self.metadata.version

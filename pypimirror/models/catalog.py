"""Results of scanning a download directory and assembling a mirror."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pypimirror.models.metadata import PackageArtifact


class LinkMode(str, Enum):
    """How artifacts are placed into the mirror tree."""

    SYMLINK = "symlink"
    COPY = "copy"


class ScanFailure(BaseModel):
    """An artifact that could not be resolved during a collect-and-continue scan."""

    model_config = ConfigDict(frozen=True)

    path: Path
    error: str


class ScanResult(BaseModel):
    """Artifacts found in a directory, in traversal order."""

    artifacts: list[PackageArtifact] = Field(default_factory=list)
    failures: list[ScanFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class PackageListing(BaseModel):
    """A distribution name with its versions, newest first."""

    model_config = ConfigDict(frozen=True)

    name: str
    versions: list[str] = []


class MirrorReport(BaseModel):
    """Summary of a mirror assembly run."""

    model_config = ConfigDict(frozen=True)

    mirror_dir: Path
    groups: list[str] = []
    placed: int = 0
    root_index_written: bool = False

"""Options for the external package downloader."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class DownloadRequest(BaseModel):
    """Everything ``pip download`` needs to fill a download directory."""

    model_config = ConfigDict(frozen=True)

    packages: list[str] = []
    requirements: list[Path] = []
    dest: Path = Path(".")
    index_url: str = ""
    proxy: str = ""
    allow_binary: bool = False
    platforms: list[str] = []
    python_version: str = ""
    implementation: str = ""
    abis: list[str] = []
    no_build_isolation: bool = False

    @property
    def constrains_binary(self) -> bool:
        """Whether a platform, interpreter or ABI constraint was given."""
        return bool(
            self.platforms or self.python_version or self.implementation or self.abis
        )

"""Records handed to the index renderer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PackageIndexEntry(BaseModel):
    """One link on a per-distribution index page."""

    model_config = ConfigDict(frozen=True)

    filename: str
    name: str
    sha256: str | None = None


class RootIndexEntry(BaseModel):
    """One link on the root index page, pointing at a distribution directory."""

    model_config = ConfigDict(frozen=True)

    norm_name: str
    name: str

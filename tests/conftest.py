"""Shared test fixtures for pypimirror.

The archive factories write real tar.gz / tar.bz2 / zip / whl files into a
temporary download directory, so extraction runs against the same codecs
production does.
"""

from __future__ import annotations

import io
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from pypimirror.core.catalog import PackageCatalog
from pypimirror.core.resolver import MetadataResolver
from pypimirror.models.metadata import PackageArtifact, PackageMetadata


def description(
    name: str | None = "example",
    version: str | None = "1.0",
    homepage: str | None = None,
    *,
    project_url: bool = False,
) -> str:
    """Build a PKG-INFO / METADATA text blob."""
    lines = ["Metadata-Version: 2.1"]
    if name is not None:
        lines.append(f"Name: {name}")
    if version is not None:
        lines.append(f"Version: {version}")
    lines.append("Summary: A test package")
    if homepage is not None:
        if project_url:
            lines.append(f"Project-URL: Homepage, {homepage}")
        else:
            lines.append(f"Home-page: {homepage}")
    lines.append("")
    lines.append("Long description text.")
    return "\n".join(lines) + "\n"


def write_tar(path: Path, members: dict[str, str], mode: str) -> Path:
    with tarfile.open(path, mode) as tar:
        for member, content in members.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(member)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return path


def write_zip(path: Path, members: dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        for member, content in members.items():
            archive.writestr(member, content)
    return path


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    """Provide an empty download directory."""
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def mirror_dir(tmp_path: Path) -> Path:
    """Provide a (not yet created) mirror directory path."""
    return tmp_path / "mirror"


@pytest.fixture
def make_sdist(download_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write an sdist-style archive.

    ``pkg_info`` is stored at ``<stem>/PKG-INFO``; pass ``None`` to leave
    it out.  ``fmt`` is one of ``.tar.gz``, ``.tar.bz2`` or ``.zip``.
    """

    def _factory(
        stem: str = "example-1.0",
        pkg_info: str | None = "",
        fmt: str = ".tar.gz",
        extra: dict[str, str] | None = None,
    ) -> Path:
        if pkg_info == "":
            name, _, version = stem.rpartition("-")
            pkg_info = description(name, version)
        members = {f"{stem}/setup.py": "from setuptools import setup\nsetup()\n"}
        if pkg_info is not None:
            members[f"{stem}/PKG-INFO"] = pkg_info
        members.update(extra or {})
        path = download_dir / f"{stem}{fmt}"
        if fmt == ".tar.gz":
            return write_tar(path, members, "w:gz")
        if fmt == ".tar.bz2":
            return write_tar(path, members, "w:bz2")
        if fmt == ".zip":
            return write_zip(path, members)
        raise ValueError(f"unsupported sdist format {fmt!r}")

    return _factory


@pytest.fixture
def make_wheel(download_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a wheel with a ``.dist-info/METADATA`` member."""

    def _factory(
        filename: str = "example-1.0-py3-none-any.whl",
        metadata: str | None = "",
    ) -> Path:
        dist, version, _ = filename.split("-", 2)
        if metadata == "":
            metadata = description(dist, version)
        members = {f"{dist}/__init__.py": ""}
        if metadata is not None:
            members[f"{dist}-{version}.dist-info/METADATA"] = metadata
        return write_zip(download_dir / filename, members)

    return _factory


@pytest.fixture
def resolver() -> MetadataResolver:
    """Provide a MetadataResolver with default collaborators."""
    return MetadataResolver()


@pytest.fixture
def catalog(resolver: MetadataResolver) -> PackageCatalog:
    """Provide a sequential, fail-fast PackageCatalog."""
    return PackageCatalog(resolver)


@pytest.fixture
def make_artifact(tmp_path: Path) -> Callable[..., PackageArtifact]:
    """Factory fixture: build an in-memory PackageArtifact (no file on disk)."""

    def _factory(
        name: str = "example",
        version: str = "1.0",
        *,
        trusted: bool = True,
        filename: str | None = None,
        sha256: str | None = "ab" * 32,
    ) -> PackageArtifact:
        metadata = PackageMetadata(
            name=name, version=version, trusted=trusted, sha256=sha256
        )
        return PackageArtifact(
            path=tmp_path / (filename or f"{name}-{version}.tar.gz"),
            metadata=metadata,
        )

    return _factory


@pytest.fixture
def make_description() -> Callable[..., str]:
    """Factory fixture: build a package description text blob."""
    return description

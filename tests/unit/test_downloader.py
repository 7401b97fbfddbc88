"""Tests for PipDownloader — command line construction and failure mapping."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from pypimirror.core import downloader as downloader_module
from pypimirror.core.downloader import PipDownloader
from pypimirror.core.errors import DownloadError
from pypimirror.models.download import DownloadRequest


class TestBuildArgs:
    def test_minimal(self, tmp_path):
        args = PipDownloader().build_args(DownloadRequest(packages=["foo"], dest=tmp_path))
        assert args == ["pip3", "download", "-d", str(tmp_path), "--no-binary", ":all:", "foo"]

    def test_requires_packages_or_requirements(self, tmp_path):
        with pytest.raises(DownloadError, match="at least one"):
            PipDownloader().build_args(DownloadRequest(dest=tmp_path))

    def test_requirements_only(self, tmp_path):
        req = tmp_path / "requirements.txt"
        args = PipDownloader().build_args(DownloadRequest(requirements=[req], dest=tmp_path))
        assert args[-2:] == ["-r", str(req)]

    def test_allow_binary_drops_no_binary(self, tmp_path):
        args = PipDownloader().build_args(
            DownloadRequest(packages=["foo"], dest=tmp_path, allow_binary=True)
        )
        assert "--no-binary" not in args
        assert "--only-binary" not in args

    def test_platform_constraints_force_only_binary(self, tmp_path):
        request = DownloadRequest(
            packages=["foo", "bar==1.0"],
            dest=tmp_path,
            allow_binary=True,
            platforms=["manylinux2014_x86_64", "any"],
            python_version="3.11",
            implementation="cp",
            abis=["cp311", "abi3"],
            no_build_isolation=True,
            index_url="https://index.example/simple",
            proxy="http://proxy.example:3128",
        )
        args = PipDownloader(pip="/usr/bin/pip").build_args(request)
        assert args == [
            "/usr/bin/pip", "download", "-d", str(tmp_path),
            "--index-url", "https://index.example/simple",
            "--proxy", "http://proxy.example:3128",
            "--only-binary", ":all:",
            "--platform", "manylinux2014_x86_64",
            "--platform", "any",
            "--python-version", "3.11",
            "--implementation", "cp",
            "--no-build-isolation",
            "--abi", "cp311",
            "--abi", "abi3",
            "foo", "bar==1.0",
        ]  # fmt: skip


class TestDownload:
    def test_runs_pip_then_writes_sidecars(self, download_dir, make_sdist, monkeypatch):
        calls: list[list[str]] = []

        def fake_run(args, check):
            calls.append(args)
            make_sdist("fetched-1.0")
            return subprocess.CompletedProcess(args, 0)

        monkeypatch.setattr(downloader_module.subprocess, "run", fake_run)
        result = PipDownloader().download(DownloadRequest(packages=["fetched"], dest=download_dir))

        assert calls and calls[0][:2] == ["pip3", "download"]
        assert [a.filename for a in result.artifacts] == ["fetched-1.0.tar.gz"]
        assert (download_dir / "fetched-1.0.tar.gz.metadata.json").exists()

    def test_nonzero_exit(self, download_dir, monkeypatch):
        def fake_run(args, check):
            raise subprocess.CalledProcessError(1, args)

        monkeypatch.setattr(downloader_module.subprocess, "run", fake_run)
        with pytest.raises(DownloadError, match="exit status 1"):
            PipDownloader().download(DownloadRequest(packages=["foo"], dest=download_dir))

    def test_missing_pip(self, download_dir):
        downloader = PipDownloader(pip=str(Path("/nonexistent") / "pip-missing"))
        with pytest.raises(DownloadError, match="not found"):
            downloader.download(DownloadRequest(packages=["foo"], dest=download_dir))

"""Environment-driven configuration.

Centralized settings using pydantic-settings.  Reads from a .env file and
PYPIMIRROR_* environment variables; CLI options take their defaults from
here.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pypimirror.core.query import DEFAULT_QUERY_URL


class MirrorSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PYPIMIRROR_DOWNLOAD_DIR=/srv/pypi/downloads
        export PYPIMIRROR_MIRROR_DIR=/srv/pypi/simple
        export PYPIMIRROR_WORKERS=8

    Or via .env file::

        PYPIMIRROR_COPY_FILES=true
        PYPIMIRROR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PYPIMIRROR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directories
    download_dir: Path = Path(".")
    mirror_dir: Path = Path(".")

    # Mirror assembly
    copy_files: bool = False

    # Scanning
    workers: int = Field(default=1, ge=1)
    fail_fast: bool = True

    # Downloader
    pip: str = "pip3"
    index_url: str = ""
    proxy: str = ""

    # Release query
    query_url: str = DEFAULT_QUERY_URL
    query_timeout: float = 30.0

    # Observability
    log_level: str = "INFO"


# Module-level singleton: import as `from pypimirror.config import settings`
settings = MirrorSettings()

"""Sidecar metadata cache stored beside each artifact.

A sidecar is ``<artifact>.metadata.json``.  It is trusted until deleted;
nothing ever invalidates it automatically.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pypimirror.core.errors import SidecarError
from pypimirror.models.metadata import PackageMetadata

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".metadata.json"


def is_sidecar(path: Path | str) -> bool:
    return str(path).endswith(SIDECAR_SUFFIX)


class SidecarCache:
    """Reads and writes ``.metadata.json`` files next to artifacts."""

    suffix = SIDECAR_SUFFIX

    def path_for(self, artifact_path: Path) -> Path:
        artifact_path = Path(artifact_path)
        return artifact_path.with_name(artifact_path.name + self.suffix)

    def exists(self, artifact_path: Path) -> bool:
        return self.path_for(artifact_path).exists()

    def load(self, artifact_path: Path) -> PackageMetadata | None:
        """Return the cached record for *artifact_path*, or ``None``.

        A missing sidecar, or one whose ``name`` is empty, means no cache.
        A record without a ``trusted`` key loads as untrusted.
        Any other read or decode failure raises ``SidecarError``.
        """
        path = self.path_for(artifact_path)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SidecarError(f"cannot read sidecar {str(path)!r}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SidecarError(f"cannot decode sidecar {str(path)!r}: {exc}") from exc
        if not isinstance(data, dict):
            raise SidecarError(f"sidecar {str(path)!r} does not hold a JSON object")
        if not data.get("name"):
            return None
        # records without the key predate trust tracking
        data.setdefault("trusted", False)

        try:
            return PackageMetadata.model_validate(data)
        except ValidationError as exc:
            raise SidecarError(f"invalid sidecar {str(path)!r}: {exc}") from exc

    def store(self, artifact_path: Path, metadata: PackageMetadata) -> Path:
        """Write *metadata* as the sidecar of *artifact_path*, replacing any."""
        path = self.path_for(artifact_path)
        path.write_text(
            json.dumps(metadata.model_dump(mode="json")) + "\n", encoding="utf-8"
        )
        logger.debug("Wrote sidecar %s", path)
        return path

    def purge(self, directory: Path) -> int:
        """Delete every sidecar below *directory*.  Returns how many were removed."""
        removed = 0
        for path in sorted(Path(directory).rglob(f"*{self.suffix}")):
            if path.is_file():
                path.unlink()
                removed += 1
        logger.info("Removed %d sidecar(s) under %s", removed, directory)
        return removed

"""Name reconciliation within one distribution.

Artifacts sharing a normalized name may disagree on the display name:
wheels whose declared name had to be recovered heuristically are untrusted.
The first trusted name in the group is copied onto every untrusted member.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pypimirror.models.metadata import PackageArtifact

logger = logging.getLogger(__name__)


def fix_names(group: Sequence[PackageArtifact]) -> str | None:
    """Rewrite untrusted names in *group* to the first trusted name.

    Returns the canonical name, or ``None`` when the group has no trusted
    member (in which case nothing changes).  Only ``name`` is written;
    ``norm_name``, ``version`` and ``sha256`` are left alone.
    """
    trusted = [a for a in group if a.metadata.trusted]
    if not trusted:
        return None
    canonical = trusted[0].metadata.name
    for artifact in group:
        if artifact.metadata.trusted or artifact.metadata.name == canonical:
            continue
        logger.debug(
            "Renaming %s from %r to trusted name %r",
            artifact.filename,
            artifact.metadata.name,
            canonical,
        )
        artifact.metadata.name = canonical
    return canonical

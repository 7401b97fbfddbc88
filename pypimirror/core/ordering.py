"""Version and name ordering, and run-length grouping of artifacts.

Versions are compared structurally with ``packaging.version.Version``; when
either side is not a valid version the raw texts are compared byte-wise.
Names are compared with a ``Collator`` so that case and accents sort the way
a human-facing catalog expects.

Grouping sorts first, then splits the sorted sequence into runs of equal
keys, so groups come out in key order and each group keeps the sort order.
"""

from __future__ import annotations

import functools
import unicodedata
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from packaging.version import InvalidVersion, Version

from pypimirror.models.metadata import PackageArtifact

T = TypeVar("T")
K = TypeVar("K")


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


def _parse_version(text: str) -> Version | None:
    try:
        return Version(text)
    except InvalidVersion:
        return None


def _compare_bytes(a: str, b: str) -> int:
    ab, bb = a.encode("utf-8"), b.encode("utf-8")
    return (ab > bb) - (ab < bb)


def compare_versions(a: str, b: str) -> int:
    """Three-way comparison of two version strings.

    Returns a negative number, zero or a positive number.  Versions that are
    structurally equal but spelled differently (``1.0`` and ``1.0.0``) are
    ordered by their raw text so the result is deterministic.
    """
    va, vb = _parse_version(a), _parse_version(b)
    if va is None or vb is None:
        return _compare_bytes(a, b)
    if va != vb:
        return -1 if va < vb else 1
    return _compare_bytes(a, b)


version_key = functools.cmp_to_key(compare_versions)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def catalog_sort_key(text: str) -> tuple[str, str, str, str]:
    """Multi-level key approximating a locale collation.

    Level one compares base letters ignoring accents and case, level two
    brings accents in, level three case (lower before upper), and the raw
    text breaks any remaining tie.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold(), text.swapcase(), text)


class Collator:
    """Compares display names for catalog ordering.

    Parameters
    ----------
    key:
        Sort key applied to each string.  Defaults to ``catalog_sort_key``;
        substitute ``locale.strxfrm`` or an ICU collator's ``getSortKey`` to
        follow a specific locale.
    """

    def __init__(self, key: Callable[[str], Any] = catalog_sort_key) -> None:
        self._key = key

    def key(self, text: str) -> Any:
        return self._key(text)

    def compare(self, a: str, b: str) -> int:
        ka, kb = self._key(a), self._key(b)
        return (ka > kb) - (ka < kb)


DEFAULT_COLLATOR = Collator()


# ---------------------------------------------------------------------------
# Sorting artifacts
# ---------------------------------------------------------------------------


def sort_by_version(
    artifacts: Iterable[PackageArtifact], *, descending: bool = False
) -> list[PackageArtifact]:
    return sorted(
        artifacts, key=lambda a: version_key(a.metadata.version), reverse=descending
    )


def sort_by_name(
    artifacts: Iterable[PackageArtifact],
    *,
    descending: bool = False,
    collator: Collator = DEFAULT_COLLATOR,
) -> list[PackageArtifact]:
    return sorted(
        artifacts, key=lambda a: collator.key(a.metadata.name), reverse=descending
    )


def sort_by_norm_name(
    artifacts: Iterable[PackageArtifact],
    *,
    descending: bool = False,
    collator: Collator = DEFAULT_COLLATOR,
) -> list[PackageArtifact]:
    return sorted(
        artifacts,
        key=lambda a: collator.key(a.metadata.norm_name),
        reverse=descending,
    )


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Group(Generic[K, T]):
    """A run of consecutive items sharing ``key``."""

    key: K
    items: list[T] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def group_by(
    items: Iterable[T],
    key: Callable[[T], K],
    order: Callable[[Iterable[T]], list[T]] | None = None,
) -> list[Group[K, T]]:
    """Sort *items* with *order*, then split them into runs of equal *key*.

    *order* defaults to a stable sort on *key* itself.  The input is never
    modified.
    """
    if order is None:
        ordered = sorted(items, key=key)
    else:
        ordered = order(items)
    groups: list[Group[K, T]] = []
    for item in ordered:
        k = key(item)
        if groups and groups[-1].key == k:
            groups[-1].items.append(item)
        else:
            groups.append(Group(key=k, items=[item]))
    return groups


def group_by_norm_name(
    artifacts: Sequence[PackageArtifact], collator: Collator = DEFAULT_COLLATOR
) -> list[Group[str, PackageArtifact]]:
    """Group by normalized name; each group is version-ascending."""
    return group_by(
        artifacts,
        key=lambda a: a.metadata.norm_name,
        order=lambda items: sort_by_norm_name(sort_by_version(items), collator=collator),
    )


def group_by_name(
    artifacts: Sequence[PackageArtifact], collator: Collator = DEFAULT_COLLATOR
) -> list[Group[str, PackageArtifact]]:
    """Group by display name; each group is version-ascending."""
    return group_by(
        artifacts,
        key=lambda a: a.metadata.name,
        order=lambda items: sort_by_name(sort_by_version(items), collator=collator),
    )


def group_by_version(
    artifacts: Sequence[PackageArtifact],
) -> list[Group[str, PackageArtifact]]:
    """Group by version, oldest first.  Reverse the result for newest first."""
    return group_by(artifacts, key=lambda a: a.metadata.version, order=sort_by_version)

"""Parsing of package description text (``PKG-INFO`` / ``METADATA``).

The description is a line-oriented ``Key: value`` blob.  Only three fields
are needed: ``Name``, ``Version`` and the homepage, which has two historical
spellings (``Home-page:`` and ``Project-URL: Homepage, ...``).  Fields are
found with line-anchored patterns; the first match wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pypimirror.core.errors import InvalidMetadata, MetadataExtractionFailed
from pypimirror.models.metadata import PackageMetadata, normalize

__all__ = [
    "DEFAULT_PATTERNS",
    "MetadataParser",
    "MetadataPatterns",
    "normalize",
]


@dataclass(frozen=True)
class MetadataPatterns:
    """Compiled patterns used to pick fields out of a description.

    Each pattern must expose the field value as its first group.
    """

    name: re.Pattern[str]
    version: re.Pattern[str]
    homepage: re.Pattern[str]


DEFAULT_PATTERNS = MetadataPatterns(
    name=re.compile(r"^Name: (.*)$", re.MULTILINE),
    version=re.compile(r"^Version: (.*)$", re.MULTILINE),
    homepage=re.compile(
        r"^(?:Home-[pP]age:|Project-URL: [Hh]ome-?[pP]age,) (.*)$", re.MULTILINE
    ),
)


class MetadataParser:
    """Turns description text, or an archive filename stem, into metadata.

    Parameters
    ----------
    patterns:
        Field patterns.  Defaults to ``DEFAULT_PATTERNS``.
    """

    def __init__(self, patterns: MetadataPatterns = DEFAULT_PATTERNS) -> None:
        self._patterns = patterns

    def parse(self, text: str) -> PackageMetadata:
        """Parse a description blob.

        Raises ``InvalidMetadata`` when ``Name`` or ``Version`` is missing.
        A missing homepage yields an empty string.  The record is always
        trusted: it was read from the conventional in-archive location.
        """
        name = self._search(self._patterns.name, text)
        if name is None:
            raise InvalidMetadata("Name")
        version = self._search(self._patterns.version, text)
        if version is None:
            raise InvalidMetadata("Version")
        homepage = self._search(self._patterns.homepage, text) or ""
        return PackageMetadata(
            name=name,
            norm_name=normalize(name),
            version=version,
            homepage=homepage,
            trusted=True,
        )

    def from_filename_stem(self, stem: str) -> PackageMetadata:
        """Infer name and version from ``<name>-<version>``.

        The stem is split on its last ``-``.  Source distribution filenames
        are reliable, so the record is trusted.
        """
        name, sep, version = stem.rpartition("-")
        if not sep:
            raise MetadataExtractionFailed(stem)
        return PackageMetadata(
            name=name,
            norm_name=normalize(name),
            version=version,
            trusted=True,
        )

    @staticmethod
    def _search(pattern: re.Pattern[str], text: str) -> str | None:
        match = pattern.search(text)
        if match is None:
            return None
        return match.group(1).strip()

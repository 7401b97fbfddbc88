"""HTML pages of a simple package index.

Pure functions of their input: the root page links every distribution
directory, and a distribution page links each of its files with the
``#sha256=`` fragment pip uses for hash checking.
"""

from __future__ import annotations

from collections.abc import Sequence
from html import escape

from pypimirror.models.index import PackageIndexEntry, RootIndexEntry

_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>{title}</title>
  </head>
  <body>
{heading}{links}
  </body>
</html>
"""


class IndexRenderer:
    """Renders index pages from pre-sorted, non-empty entry sequences."""

    def render_root(self, entries: Sequence[RootIndexEntry]) -> str:
        if not entries:
            raise ValueError("cannot render a root index without entries")
        links = "\n".join(
            f'    <a href="{escape(e.norm_name)}/index.html">{escape(e.name)}</a><br/>'
            for e in entries
        )
        return _PAGE.format(title="Simple index", heading="", links=links)

    def render_package(self, entries: Sequence[PackageIndexEntry]) -> str:
        if not entries:
            raise ValueError("cannot render a package index without entries")
        title = f"Links for {escape(entries[0].name)}"
        links = "\n".join(self._file_link(e) for e in entries)
        return _PAGE.format(title=title, heading=f"    <h1>{title}</h1>\n", links=links)

    @staticmethod
    def _file_link(entry: PackageIndexEntry) -> str:
        href = escape(entry.filename)
        if entry.sha256:
            href = f"{href}#sha256={escape(entry.sha256)}"
        return f'    <a href="{href}">{escape(entry.filename)}</a><br/>'

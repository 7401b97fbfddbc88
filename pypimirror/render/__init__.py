"""Index page rendering."""

from pypimirror.render.index_html import IndexRenderer

__all__ = ["IndexRenderer"]

"""pypimirror: self-hosted Python package index builder.

Turns a directory of downloaded distribution archives (sdists, zips and
wheels) into a static "simple" index that pip can install from:

  - metadata extraction from tar.gz / tar.bz2 / zip / whl archives
  - sidecar ``.metadata.json`` caching of extracted metadata
  - reconciliation of display names across files of one distribution
  - version- and locale-aware grouping for listings and mirror layout
  - mirror assembly with symlinked or copied archives and index pages
"""

__version__ = "0.5.0"
__description__ = "Self-hosted Python package index builder"

from pypimirror.core.assembler import MirrorAssembler
from pypimirror.core.catalog import PackageCatalog
from pypimirror.core.resolver import MetadataResolver

__all__ = ["MetadataResolver", "MirrorAssembler", "PackageCatalog", "__version__"]

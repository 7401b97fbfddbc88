"""Mirror tree assembly.

Layout::

    <mirror>/index.html
    <mirror>/<norm_name>/index.html
    <mirror>/<norm_name>/<artifact filename>   (relative symlink or copy)

Names are reconciled per normalized-name group before the pages are written,
so every page shows the trusted display name.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from pypimirror.core.errors import MirrorAssemblyError
from pypimirror.core.ordering import DEFAULT_COLLATOR, Collator, group_by_norm_name
from pypimirror.core.reconciler import fix_names
from pypimirror.models.catalog import LinkMode, MirrorReport
from pypimirror.models.index import PackageIndexEntry, RootIndexEntry
from pypimirror.models.metadata import PackageArtifact
from pypimirror.render.index_html import IndexRenderer

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


class MirrorAssembler:
    """Builds the on-disk mirror from resolved artifacts.

    Parameters
    ----------
    renderer:
        Index page renderer.
    link_mode:
        ``LinkMode.SYMLINK`` (default) places relative symlinks to the
        original files; ``LinkMode.COPY`` copies the bytes.
    collator:
        Name collator used for grouping.
    """

    def __init__(
        self,
        renderer: IndexRenderer | None = None,
        *,
        link_mode: LinkMode = LinkMode.SYMLINK,
        collator: Collator = DEFAULT_COLLATOR,
    ) -> None:
        self.renderer = renderer or IndexRenderer()
        self.link_mode = link_mode
        self.collator = collator

    def assemble(
        self, artifacts: Sequence[PackageArtifact], mirror_dir: Path
    ) -> MirrorReport:
        """Place every artifact and write all index pages under *mirror_dir*."""
        mirror_dir = Path(os.path.abspath(mirror_dir))
        mirror_dir.mkdir(parents=True, exist_ok=True)

        root_entries: list[RootIndexEntry] = []
        placed = 0
        for group in group_by_norm_name(artifacts, self.collator):
            norm_name = group.key
            directory = mirror_dir / norm_name
            directory.mkdir(parents=True, exist_ok=True)
            fix_names(group.items)

            for artifact in group.items:
                self.place(artifact, directory)
                placed += 1

            self._write(
                directory / INDEX_FILENAME,
                self.renderer.render_package(
                    [
                        PackageIndexEntry(
                            filename=a.filename,
                            name=a.metadata.name,
                            sha256=a.metadata.sha256,
                        )
                        for a in group.items
                    ]
                ),
            )
            first = group.items[0].metadata
            root_entries.append(RootIndexEntry(norm_name=first.norm_name, name=first.name))
            logger.info("Mirrored %s (%d file(s))", norm_name, len(group.items))

        if root_entries:
            self._write(mirror_dir / INDEX_FILENAME, self.renderer.render_root(root_entries))
        else:
            logger.warning("No artifacts to mirror; root index not written")

        return MirrorReport(
            mirror_dir=mirror_dir,
            groups=[e.norm_name for e in root_entries],
            placed=placed,
            root_index_written=bool(root_entries),
        )

    # ------------------------------------------------------------------
    # File placement
    # ------------------------------------------------------------------

    def place(self, artifact: PackageArtifact, directory: Path) -> Path:
        """Put *artifact* into *directory* according to the link mode."""
        source = Path(os.path.abspath(artifact.path))
        dest = directory / artifact.filename
        if self.link_mode is LinkMode.COPY:
            try:
                shutil.copyfile(source, dest)
            except OSError as exc:
                raise MirrorAssemblyError(
                    f"failed to copy {source} to {dest}: {exc}"
                ) from exc
            return dest

        target = os.path.relpath(source, directory)
        try:
            os.symlink(target, dest)
        except FileExistsError:
            logger.debug("%s already exists, keeping it", dest)
        except OSError as exc:
            raise MirrorAssemblyError(
                f"failed to link {dest} to {target}: {exc}"
            ) from exc
        return dest

    @staticmethod
    def _write(path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise MirrorAssemblyError(f"failed to write {path}: {exc}") from exc

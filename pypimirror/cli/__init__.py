"""pypimirror CLI — Typer-based command-line interface.

Provides the ``pypimirror`` command with subcommands for downloading
packages, caching their metadata, listing what was downloaded, querying an
index for releases, and assembling the mirror.

Human-facing output uses Rich; ``--json`` and ``oneline`` output is plain.
"""

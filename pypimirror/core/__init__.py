"""Core engine: archive reading, metadata resolution, reconciliation, ordering."""

"""Shared helpers (merge, YAML I/O, subprocess and git wrappers)."""

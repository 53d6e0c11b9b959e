"""Top-level xsh commands, one module per command (discovered by the dispatcher)."""

"""treesink: one-way, non-destructive directory tree synchronization."""

__version__ = "0.3.0"

"""An in-memory simulated file system: a binary-search-tree directory tree, a block disk and an interactive shell."""

__version__ = "0.1.0"
__all__ = ["disk", "shell", "tree"]
"""grrs: recursive, gitignore-aware line search."""

from grrs.version import __version__

__all__ = ["__version__"]

"""Directory to LLM context conversion utilities.

This package walks a directory tree, filters it with gitignore-style rules and
renders the tree together with the contents of its readable files, either as
plain text or as XML.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2context")
except PackageNotFoundError:
    __version__ = "unknown"

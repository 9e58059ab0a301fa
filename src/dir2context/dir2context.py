"""Directory to LLM context conversion.

This module provides the Dir2Context class, which ties the pieces together: it
builds the filtered tree of a directory once, then renders it with the contents of
its files in the chosen format.
"""

import logging
from typing import Sequence, Union

from dir2context.context_renderer import ContextRenderer
from dir2context.content_reader import DEFAULT_ENCODING
from dir2context.file_system_tree.file_system_node import DirectoryNode
from dir2context.file_system_tree.file_system_tree import FileSystemTree
from dir2context.types import OutputFormat, PathType

logger = logging.getLogger(__name__)


class Dir2Context:
    """Directory analyzer producing a single context document.

    The whole pipeline is synchronous and runs once: the tree is walked completely
    when the object is constructed, and ``render()`` reads the contents of the
    retained files and returns the full document. Nothing is emitted before the
    traversal has finished.

    Attributes:
        directory (PathType): Directory being processed.
        output_format (OutputFormat): Format produced by render().

    Example:
        >>> analyzer = Dir2Context("src", exclude_patterns=["*.pyc"], max_depth=3)  # doctest: +SKIP
        >>> analyzer.file_count  # doctest: +SKIP
        12
        >>> print(analyzer.render())  # doctest: +SKIP
        --- Directory Tree ---
        src/
          main.py
        ...

    Raises:
        RootDirectoryError: If the directory does not exist, is not a directory or
            cannot be listed.
        InvalidPatternError: If an exclude pattern is malformed.
        ConfigurationError: If max_depth is negative.
        ValueError: If the output format is unsupported.
        LookupError: If the encoding is not available.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        output_format: Union[str, OutputFormat] = OutputFormat.TEXT,
        max_depth: int = 0,
        exclude_patterns: Sequence[str] = (),
        respect_gitignore: bool = True,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """Initialize the analysis and build the filtered tree.

        Args:
            directory: Directory to process. Can be any path-like object.
            output_format: "text", "xml" or "markup" (an alias for "xml").
            max_depth: Maximum traversal depth, 0 for unlimited.
            exclude_patterns: Additional gitignore-style patterns, evaluated after all
                .gitignore rules.
            respect_gitignore: Whether .gitignore files found in the tree are honored.
            encoding: Encoding file contents must be valid in. Defaults to UTF-8.
        """
        self.directory = directory
        self.output_format = OutputFormat.from_name(output_format)
        self._renderer = ContextRenderer(self.output_format, encoding=encoding)
        self._fs_tree = FileSystemTree(
            directory,
            respect_gitignore=respect_gitignore,
            exclude_patterns=exclude_patterns,
            max_depth=max_depth,
        )
        self._tree = self._fs_tree.get_tree()
        logger.info(
            "Found %d files in %d directories (%d symlinks)",
            self.file_count,
            self.directory_count,
            self.symlink_count,
        )

    @property
    def tree(self) -> DirectoryNode:
        """Root node of the filtered tree."""
        return self._tree

    @property
    def file_count(self) -> int:
        """Number of files retained in the tree, symlinks included."""
        return self._fs_tree.get_file_count()

    @property
    def directory_count(self) -> int:
        """Number of directories retained in the tree, excluding the root."""
        return self._fs_tree.get_directory_count()

    @property
    def symlink_count(self) -> int:
        return self._fs_tree.get_symlink_count()

    def render(self) -> str:
        """Render the tree and file contents in the configured format."""
        return self._renderer.render(self._tree)

    def get_output_file_extension(self) -> str:
        return self._renderer.get_output_file_extension()

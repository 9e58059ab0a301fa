"""File system tree representation with layered exclusion rules.

This module provides the FileSystemTree class, which walks a directory depth-first
and builds an ordered, filtered tree of DirectoryNode and FileNode objects. Entries
are filtered by gitignore-style rules discovered during the walk and by user-supplied
patterns, and the walk can be limited to a maximum depth.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from anytree import PreOrderIter

from dir2context.exceptions import ConfigurationError, RootDirectoryError
from dir2context.exclusion_rules.rule_set import IGNORE_FILE_NAME, ExclusionRuleSet
from dir2context.file_system_tree.file_system_node import DirectoryNode, FileNode, FileSystemNode
from dir2context.types import PathType

logger = logging.getLogger(__name__)


class FileSystemTree:
    """A filtered tree representation of a directory structure.

    The tree is built lazily on first access and held in memory; nothing is
    re-evaluated afterwards, so a node's presence means it passed every exclusion
    check during the walk.

    Exclusion:
        At each directory, a ``.gitignore`` found there is loaded and its rules apply to
        that directory's subtree only. User patterns are root-scoped and evaluated after
        all ignore-file rules; the last matching pattern decides. An excluded directory
        is never descended into, so nothing below it can be re-included.

    Depth:
        The root is depth 0 and ``max_depth=0`` means unlimited. A directory at depth
        ``max_depth`` is kept but its contents are not read.

    Symbolic Link Behavior:
        Symbolic links are never followed into directories, which rules out cycles. Every
        symlink appears as a file node flagged ``is_symlink``.

    Error Handling:
        A root that is missing, not a directory or not listable raises
        RootDirectoryError. A subdirectory that cannot be listed is omitted from the tree
        with a warning and the walk continues.

    Attributes:
        root_path (Path): The root directory as given.
        respect_gitignore (bool): Whether .gitignore files are honored.
        exclude_patterns (tuple[str, ...]): User-supplied gitignore-style patterns.
        max_depth (int): Maximum traversal depth, 0 for unlimited.
        exclusion_rules (ExclusionRuleSet): Root rule set compiled from the above.

    Example:
        >>> tree = FileSystemTree(".", exclude_patterns=["*.pyc"], max_depth=2)  # doctest: +SKIP
        >>> for node in tree.iterate_files():  # doctest: +SKIP
        ...     print(node.relative_path)
        README.md
        src/main.py
    """

    def __init__(
        self,
        root_path: PathType,
        respect_gitignore: bool = True,
        exclude_patterns: Sequence[str] = (),
        max_depth: int = 0,
    ) -> None:
        """Initialize a FileSystemTree.

        User patterns are compiled here, so configuration errors surface before the
        filesystem is touched.

        Args:
            root_path: Path to the root directory. Can be any path-like object.
            respect_gitignore: Whether to honor .gitignore files. Defaults to True.
            exclude_patterns: Additional gitignore-style patterns, evaluated in order after
                all ignore-file rules.
            max_depth: Maximum depth to traverse, 0 for unlimited. Defaults to 0.

        Raises:
            ConfigurationError: If max_depth is negative.
            InvalidPatternError: If an exclude pattern is malformed.
        """
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ConfigurationError(f"max_depth must be a non-negative integer, got {max_depth!r}")

        self.root_path = Path(root_path)
        self.respect_gitignore = respect_gitignore
        self.exclude_patterns = tuple(exclude_patterns)
        self.max_depth = max_depth
        self.exclusion_rules = ExclusionRuleSet.create(respect_gitignore, self.exclude_patterns)
        self._tree: Optional[DirectoryNode] = None
        self._file_count: int = 0
        self._directory_count: int = 0
        self._symlink_count: int = 0

    def get_tree(self) -> DirectoryNode:
        """Get the root node of the filesystem tree, building it on first access.

        Raises:
            RootDirectoryError: If the root cannot be opened as a directory.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        """Build the filesystem tree from the root path.

        Raises:
            RootDirectoryError: If the root path doesn't exist, isn't a directory or
                can't be listed.
        """
        try:
            resolved = self.root_path.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise RootDirectoryError(str(self.root_path), getattr(e, "strerror", None) or str(e)) from e
        if not resolved.is_dir():
            raise RootDirectoryError(str(self.root_path), "Not a directory")

        try:
            entries = self._list_directory(resolved)
        except OSError as e:
            raise RootDirectoryError(str(self.root_path), e.strerror or str(e)) from e

        logger.info("Processing directory: %s", resolved)
        if self.respect_gitignore:
            logger.info("Respecting .gitignore files.")
        if self.exclude_patterns:
            logger.info("Applying exclude patterns: %s", ", ".join(self.exclude_patterns))

        root = DirectoryNode(resolved.name or str(resolved), root_path=str(resolved))
        self._populate(root, resolved, entries, self.exclusion_rules, depth=0)
        self._tree = root
        self._count_files_and_directories()

    @staticmethod
    def _list_directory(path: PathType) -> List["os.DirEntry[str]"]:
        """List a directory sorted by entry name, independent of readdir order."""
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _populate(
        self,
        node: DirectoryNode,
        path: Path,
        entries: List["os.DirEntry[str]"],
        rules: ExclusionRuleSet,
        depth: int,
    ) -> None:
        """Attach the retained entries of one directory to its node, recursively.

        Args:
            node: Node of the directory being populated.
            path: The directory's location on disk.
            entries: The directory's entries, sorted by name.
            rules: Rules in force for the directory, before its own ignore file.
            depth: Depth of the directory, the root being 0.
        """
        if self.respect_gitignore and any(entry.name == IGNORE_FILE_NAME for entry in entries):
            ignore_file = path / IGNORE_FILE_NAME
            if ignore_file.is_file():
                rules = rules.with_ignore_file(ignore_file, node.relative_path)

        child_depth = depth + 1
        for entry in entries:
            relative_path = f"{node.relative_path}/{entry.name}" if node.relative_path else entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            decided = rules.decide(relative_path, is_dir)
            if decided is not None and not decided.is_negation:
                logger.debug("Excluding '%s' (matched %s)", relative_path, decided)
                continue

            if not is_dir:
                self._create_file_node(entry, node, relative_path)
                continue

            if self.max_depth and child_depth >= self.max_depth:
                # Depth limit reached: keep the directory, do not read it
                DirectoryNode(entry.name, parent=node, relative_path=relative_path)
                continue

            try:
                child_entries = self._list_directory(entry.path)
            except OSError as e:
                logger.warning("Could not read directory '%s': %s (skipping)", relative_path, e.strerror or e)
                continue

            child = DirectoryNode(entry.name, parent=node, relative_path=relative_path)
            self._populate(child, Path(entry.path), child_entries, rules, child_depth)

    @staticmethod
    def _create_file_node(entry: "os.DirEntry[str]", parent: DirectoryNode, relative_path: str) -> FileNode:
        symlink_target = None
        is_symlink = entry.is_symlink()
        if is_symlink:
            try:
                symlink_target = os.readlink(entry.path)
            except OSError:
                # If we can't read the link target, proceed without it
                pass
        return FileNode(
            entry.name,
            parent=parent,
            relative_path=relative_path,
            is_symlink=is_symlink,
            symlink_target=symlink_target,
        )

    def _count_files_and_directories(self) -> None:
        """Count files, directories (excluding the root) and symlinks in the tree."""
        self._file_count = 0
        self._directory_count = 0
        self._symlink_count = 0

        for node in PreOrderIter(self._tree):
            if isinstance(node, DirectoryNode):
                if not node.is_root:
                    self._directory_count += 1
            elif isinstance(node, FileNode):
                self._file_count += 1
                if node.is_symlink:
                    self._symlink_count += 1

    def get_file_count(self) -> int:
        """Get the total number of files in the tree, symlinks included."""
        self.get_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the total number of directories in the tree (excluding root)."""
        self.get_tree()
        return self._directory_count

    def get_symlink_count(self) -> int:
        self.get_tree()
        return self._symlink_count

    def iterate_files(self) -> Iterator[FileNode]:
        """Iterate over all file nodes in a pre-order flattening of the tree.

        This is the order in which files appear in the tree, and therefore the order
        of every file listing produced from it.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> [node.relative_path for node in tree.iterate_files()]  # doctest: +SKIP
            ['a.py', 'pkg/b.py', 'z.py']
        """
        yield from iterate_files(self.get_tree())

    def refresh(self) -> None:
        """Discard the cached tree and rebuild it from the current filesystem state."""
        self._tree = None
        self._build_tree()


def iterate_files(tree: FileSystemNode) -> Iterator[FileNode]:
    """Yield the file nodes of a tree in pre-order."""
    for node in PreOrderIter(tree):
        if isinstance(node, FileNode):
            yield node


def build_tree(
    root: PathType,
    rules_enabled: bool = True,
    user_patterns: Sequence[str] = (),
    max_depth: int = 0,
) -> DirectoryNode:
    """Walk ``root`` and return the filtered tree.

    Args:
        root: The directory to process.
        rules_enabled: Whether .gitignore files are honored.
        user_patterns: Additional gitignore-style exclude patterns.
        max_depth: Maximum depth, 0 for unlimited.

    Raises:
        RootDirectoryError: If the root cannot be opened as a directory.
        InvalidPatternError: If a user pattern is malformed.
        ConfigurationError: If max_depth is negative.
    """
    return FileSystemTree(
        root, respect_gitignore=rules_enabled, exclude_patterns=user_patterns, max_depth=max_depth
    ).get_tree()

"""Node representation for file system elements in the tree."""

from pathlib import Path
from typing import Any, Optional

from anytree import Node


def display_text(value: str) -> str:
    """Make a name read from disk safe to emit as UTF-8 text.

    On POSIX a file name is any byte string. Bytes that are not valid UTF-8 come back
    from os.scandir as surrogate escapes, which cannot be encoded on output; they are
    replaced with U+FFFD.

    Example:
        >>> display_text("caf\\udce9.txt") == "caf\\ufffd.txt"
        True
        >>> display_text("plain.txt")
        'plain.txt'
    """
    try:
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # Lone surrogates outside the escape range
        raw = value.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


class FileSystemNode(Node):  # type: ignore
    """Base node class representing an entry in the filtered filesystem tree.

    Extends anytree.Node with the entry's path relative to the processed root. The tree
    only ever contains the two concrete kinds, DirectoryNode and FileNode; code that
    walks it dispatches on those classes and rejects anything else.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[FileSystemNode]): The parent node in the tree.
        relative_path (str): Path relative to the processed root using forward slashes,
            "" for the root itself.
        children (tuple[FileSystemNode]): The child nodes (inherited from anytree.Node).
    """

    is_dir = False

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        relative_path: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.relative_path = relative_path

    @property
    def display_name(self) -> str:
        """The entry name as printable text, see display_text()."""
        return display_text(self.name)

    @property
    def display_path(self) -> str:
        return display_text(self.relative_path)

    @property
    def absolute_path(self) -> Path:
        """Location of the entry on disk, derived from the root node's root_path.

        Example:
            >>> root = DirectoryNode("project", root_path="/tmp/project")
            >>> FileNode("a.txt", parent=root, relative_path="a.txt").absolute_path.as_posix()
            '/tmp/project/a.txt'
        """
        base = Path(getattr(self.root, "root_path", None) or ".")
        return base / self.relative_path if self.relative_path else base


class DirectoryNode(FileSystemNode):
    """A directory in the tree.

    Children are attached in lexicographic order of their names, directories and
    files interleaved. A directory cut off by the depth limit has no children.

    Attributes:
        root_path (Optional[str]): Absolute path of the processed root. Only set on the
            root node.

    Example:
        >>> root = DirectoryNode("root", root_path="/abs/root")
        >>> child = FileNode("file.txt", parent=root, relative_path="file.txt")
        >>> root.name
        'root'
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['file.txt']
    """

    is_dir = True

    def __init__(
        self,
        name: str,
        parent: Optional[FileSystemNode] = None,
        relative_path: str = "",
        root_path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, relative_path, **kwargs)
        self.root_path = root_path


class FileNode(FileSystemNode):
    """A file in the tree.

    Symbolic links are never followed into directories, so every symlink is a file
    node; its content is read through the link.

    Attributes:
        is_symlink (bool): True if this entry is a symbolic link.
        symlink_target (Optional[str]): Target of the link as stored on disk.

    Example:
        >>> node = FileNode("link.py", is_symlink=True, symlink_target="./real.py")
        >>> node.is_symlink, node.symlink_target
        (True, './real.py')
    """

    def __init__(
        self,
        name: str,
        parent: Optional[FileSystemNode] = None,
        relative_path: str = "",
        is_symlink: bool = False,
        symlink_target: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, relative_path, **kwargs)
        self.is_symlink = is_symlink
        self.symlink_target = symlink_target

"""Output strategy base class defining the interface for tree and content formatting.

This module provides the abstract base class that defines how a filtered tree and
the contents of its files are serialized. The renderer drives a strategy through a
fixed sequence of calls and concatenates the pieces into one string.
"""

from abc import ABC, abstractmethod

from dir2context.content_reader import FileContent
from dir2context.file_system_tree.file_system_node import DirectoryNode, FileNode


class OutputStrategy(ABC):
    """Abstract base class defining the interface for output formatting strategies.

    This class implements the Strategy pattern for serializing one filtered tree in
    different formats (plain text, XML). The output is produced in phases:

    1. Start - document header
    2. Tree - the structure of the filtered tree
    3. Contents start - opening of the file contents section
    4. File - once per file, in pre-order, with its content or skip marker
       (or a single "no contents" marker when the tree holds no files)
    5. Contents end - closing of the file contents section
    6. End - document footer

    Every strategy must give every content classification a representation; a
    strategy never fails because of what a file contains.

    Example:
        >>> from dir2context.content_reader import Readable
        >>> class ListStrategy(OutputStrategy):
        ...     def format_start(self, tree): return ""
        ...     def format_tree(self, tree): return ""
        ...     def format_contents_start(self): return ""
        ...     def format_file(self, node, content):
        ...         return node.relative_path + "\\n"
        ...     def format_no_contents(self): return "(none)\\n"
        ...     def format_contents_end(self): return ""
        ...     def format_end(self): return ""
        ...     def get_file_extension(self): return ".lst"
        >>> ListStrategy().format_file(FileNode("a.txt", relative_path="a.txt"), Readable("hi"))
        'a.txt\\n'
    """

    @abstractmethod
    def format_start(self, tree: DirectoryNode) -> str:
        """Format the document header.

        Args:
            tree: Root node of the filtered tree.
        """
        pass

    @abstractmethod
    def format_tree(self, tree: DirectoryNode) -> str:
        """Format the structure of the whole tree, root included."""
        pass

    @abstractmethod
    def format_contents_start(self) -> str:
        pass

    @abstractmethod
    def format_file(self, node: FileNode, content: FileContent) -> str:
        """Format one file entry of the contents section.

        Args:
            node: The file node; its relative_path identifies the entry.
            content: The classified content of the file.

        Returns:
            The formatted entry, including any delimiters.
        """
        pass

    @abstractmethod
    def format_no_contents(self) -> str:
        """Format the marker used when the tree contains no files."""
        pass

    @abstractmethod
    def format_contents_end(self) -> str:
        pass

    @abstractmethod
    def format_end(self) -> str:
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".txt", ".xml").
        """
        pass

"""Rendering of a filtered tree and its file contents into a single document.

This module coordinates the filesystem tree, the content reader and an output
strategy. Contents are read lazily, one file at a time in pre-order, and folded into
the output immediately; only the rendered document is kept.
"""

from typing import Optional, Union

from .content_reader import DEFAULT_ENCODING, read_content, validate_encoding
from .file_system_tree.file_system_node import DirectoryNode
from .file_system_tree.file_system_tree import iterate_files
from .output_strategies.base_strategy import OutputStrategy
from .output_strategies.text_strategy import TextOutputStrategy
from .output_strategies.xml_strategy import XMLOutputStrategy
from .types import OutputFormat


class ContextRenderer:
    """Renders a filtered tree with the contents of its files.

    The renderer asks the strategy for a header, the tree, then one entry per file in
    the same pre-order as the tree itself, so the contents section always lists
    exactly the file nodes of the tree. Every file is read only when its entry is
    rendered.

    Attributes:
        output_strategy (OutputStrategy): Strategy for formatting the output.
        encoding (str): The encoding file contents must be valid in.

    Example:
        >>> from dir2context.file_system_tree.file_system_tree import build_tree
        >>> tree = build_tree("src")  # doctest: +SKIP
        >>> print(ContextRenderer("xml").render(tree))  # doctest: +SKIP
    """

    def __init__(
        self,
        output_format: Union[str, OutputFormat, OutputStrategy] = OutputFormat.TEXT,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """Initialize the ContextRenderer.

        Args:
            output_format: A format name ("text", "xml" or its alias "markup"), an
                OutputFormat, or an OutputStrategy instance. Defaults to text.
            encoding: The encoding to decode file contents with. Defaults to "utf-8".

        Raises:
            ValueError: If output_format names an unsupported format.
            TypeError: If output_format is neither a format nor an OutputStrategy.
            LookupError: If the specified encoding is not available.
        """
        self.encoding = validate_encoding(encoding)

        if isinstance(output_format, OutputStrategy):
            self.output_strategy: OutputStrategy = output_format
        elif isinstance(output_format, str):
            if OutputFormat.from_name(output_format) is OutputFormat.XML:
                self.output_strategy = XMLOutputStrategy()
            else:
                self.output_strategy = TextOutputStrategy()
        else:
            raise TypeError("output_format must be either a format name ('text' or 'xml') or an OutputStrategy instance")

    def render(self, tree: DirectoryNode) -> str:
        """Render the tree and the contents of all its files.

        Args:
            tree: Root node of a filtered tree, carrying the absolute root_path.

        Returns:
            The complete document. Unreadable, binary or undecodable files are
            rendered with a skip marker; rendering itself never fails on content.
        """
        strategy = self.output_strategy
        parts = [strategy.format_start(tree), strategy.format_tree(tree), strategy.format_contents_start()]

        has_files = False
        for node in iterate_files(tree):
            has_files = True
            content = read_content(node.absolute_path, self.encoding, display_path=node.relative_path)
            parts.append(strategy.format_file(node, content))

        if not has_files:
            parts.append(strategy.format_no_contents())
        parts.append(strategy.format_contents_end())
        parts.append(strategy.format_end())
        return "".join(parts)

    def get_output_file_extension(self) -> str:
        """Get the appropriate file extension for the current output format.

        Example:
            >>> ContextRenderer("xml").get_output_file_extension()
            '.xml'
        """
        return self.output_strategy.get_file_extension()


def render_text(tree: DirectoryNode) -> str:
    """Serialize a filtered tree as an indented outline followed by its file contents."""
    return ContextRenderer(TextOutputStrategy()).render(tree)


def render_markup(tree: DirectoryNode, root_absolute_path: Optional[str] = None) -> str:
    """Serialize a filtered tree as an XML document.

    Args:
        tree: Root node of a filtered tree.
        root_absolute_path: Value of the rootPath attribute. Defaults to the root
            node's own root_path.
    """
    return ContextRenderer(XMLOutputStrategy(root_path=root_absolute_path)).render(tree)

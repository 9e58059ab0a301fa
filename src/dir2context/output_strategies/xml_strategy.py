"""XML output strategy for tree and file content formatting.

This module provides a strategy that serializes the filtered tree as nested XML
elements and embeds file contents in CDATA sections, escaping only what the CDATA
mechanism itself cannot carry so that a parser recovers the original text exactly.
"""

import base64
import logging
import re
from typing import List, Optional
from xml.sax.saxutils import escape as xml_escape

from dir2context.content_reader import FileContent, Readable, Skipped
from dir2context.file_system_tree.file_system_node import DirectoryNode, FileNode, FileSystemNode, display_text

from .base_strategy import OutputStrategy

logger = logging.getLogger(__name__)

CDATA_START = "<![CDATA["
CDATA_END = "]]>"

# Characters XML 1.0 cannot carry at all, not even as character references
XML_ILLEGAL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
REPLACEMENT_CHAR = "\ufffd"

NO_CONTENTS_COMMENT = " No readable files found or all were excluded/ignored "


def format_cdata(text: str) -> str:
    """Embed text in CDATA sections so that an XML parser recovers it unchanged.

    Two sequences need care:
    - ``]]>`` would close the section early, so the section is split between ``]]``
      and ``>``.
    - A carriage return would be folded into a line feed by XML end-of-line
      normalization, so it is emitted as the ``&#13;`` character reference between
      two sections.

    Args:
        text: Text free of XML-illegal characters.

    Returns:
        Zero or more adjacent CDATA sections and character references.

    Example:
        >>> format_cdata("if a < b && c > d:")
        '<![CDATA[if a < b && c > d:]]>'
        >>> format_cdata("x]]>y")
        '<![CDATA[x]]]]><![CDATA[>y]]>'
        >>> format_cdata("a\\r\\nb")
        '<![CDATA[a]]>&#13;<![CDATA[\\nb]]>'
        >>> format_cdata("")
        ''
    """
    pieces: List[str] = []
    for index, segment in enumerate(text.split("\r")):
        if index:
            pieces.append("&#13;")
        if segment:
            pieces.append(CDATA_START + segment.replace("]]>", "]]" + CDATA_END + CDATA_START + ">") + CDATA_END)
    return "".join(pieces)


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that formats the tree and file contents as an XML document.

    The document has the following structure:

        <?xml version="1.0" encoding="UTF-8"?>
        <projectContext rootPath="/abs/path/project">
          <tree>
            <dir name="project">
              <file name="a.txt"/>
              <dir name="src">
                <file name="main.py"/>
              </dir>
            </dir>
          </tree>
          <fileContents>
            <file path="a.txt"><![CDATA[hi]]></file>
            <file path="logo.png" skipped="binary"/>
          </fileContents>
        </projectContext>

    Attribute values are XML-escaped using xml.sax.saxutils.escape. Readable content
    that contains characters XML 1.0 forbids outright is embedded as base64 of its
    UTF-8 bytes and marked with ``encoding="base64"``, so content is never dropped or
    altered.

    Attributes:
        root_path: Absolute root path written to the rootPath attribute. When None,
            the root node's root_path is used.

    Example:
        >>> strategy = XMLOutputStrategy()
        >>> from dir2context.content_reader import SkipReason
        >>> node = FileNode("logo.png", relative_path="img/logo.png")
        >>> print(strategy.format_file(node, Skipped(SkipReason.BINARY)), end='')
            <file path="img/logo.png" skipped="binary"/>
        >>> print(strategy.format_file(node, Readable("x & y")), end='')
            <file path="img/logo.png"><![CDATA[x & y]]></file>
    """

    def __init__(self, root_path: Optional[str] = None) -> None:
        """Initialize the XML output strategy."""
        self.root_path = root_path
        # Define XML entities mapping for proper attribute escaping
        self._xml_entities = {
            '"': "&quot;",
            "'": "&apos;",
            "\t": "&#9;",
            "\n": "&#10;",
            "\r": "&#13;",
        }

    def _attr(self, value: str) -> str:
        """Quote a name or path as an attribute value.

        Names on disk may hold bytes that are not UTF-8 and control characters that
        XML 1.0 cannot represent even as references. Both are replaced with U+FFFD so
        the document stays well-formed.
        """
        text = display_text(value)
        if XML_ILLEGAL_CHARS.search(text):
            logger.warning("Replacing characters XML cannot represent in %r", value)
            text = XML_ILLEGAL_CHARS.sub(REPLACEMENT_CHAR, text)
        return '"' + xml_escape(text, self._xml_entities) + '"'

    def format_start(self, tree: DirectoryNode) -> str:
        root_path = self.root_path if self.root_path is not None else (tree.root_path or "")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n<projectContext rootPath={self._attr(root_path)}>\n'

    def format_tree(self, tree: DirectoryNode) -> str:
        lines = ["  <tree>"]
        self._append_node(tree, 2, lines)
        lines.append("  </tree>")
        return "".join(line + "\n" for line in lines)

    def _append_node(self, node: FileSystemNode, level: int, lines: List[str]) -> None:
        indent = "  " * level
        if isinstance(node, DirectoryNode):
            if not node.children:
                lines.append(f"{indent}<dir name={self._attr(node.name)}/>")
                return
            lines.append(f"{indent}<dir name={self._attr(node.name)}>")
            for child in node.children:
                self._append_node(child, level + 1, lines)
            lines.append(f"{indent}</dir>")
        elif isinstance(node, FileNode):
            symlink = ""
            if node.is_symlink and node.symlink_target is not None:
                symlink = f" symlinkTarget={self._attr(node.symlink_target)}"
            lines.append(f"{indent}<file name={self._attr(node.name)}{symlink}/>")
        else:
            raise TypeError(f"Unsupported node type: {type(node).__name__}")

    def format_contents_start(self) -> str:
        return "  <fileContents>\n"

    def format_file(self, node: FileNode, content: FileContent) -> str:
        """Format one file-content element.

        Example:
            >>> strategy = XMLOutputStrategy()
            >>> node = FileNode("a.txt", relative_path="a & b.txt")
            >>> print(strategy.format_file(node, Readable("")), end='')
                <file path="a &amp; b.txt"></file>
            >>> print(strategy.format_file(node, Readable("bell\\x07")), end='')
                <file path="a &amp; b.txt" encoding="base64">YmVsbAc=</file>
        """
        path = self._attr(node.relative_path)
        if isinstance(content, Skipped):
            return f"    <file path={path} skipped={self._attr(content.reason.value)}/>\n"
        elif isinstance(content, Readable):
            if XML_ILLEGAL_CHARS.search(content.text):
                encoded = base64.b64encode(content.text.encode("utf-8")).decode("ascii")
                return f'    <file path={path} encoding="base64">{encoded}</file>\n'
            return f"    <file path={path}>{format_cdata(content.text)}</file>\n"
        else:
            raise TypeError(f"Unsupported content type: {type(content).__name__}")

    def format_no_contents(self) -> str:
        return f"    <!--{NO_CONTENTS_COMMENT}-->\n"

    def format_contents_end(self) -> str:
        return "  </fileContents>\n"

    def format_end(self) -> str:
        return "</projectContext>\n"

    def get_file_extension(self) -> str:
        """Get the file extension for XML output.

        Example:
            >>> XMLOutputStrategy().get_file_extension()
            '.xml'
        """
        return ".xml"

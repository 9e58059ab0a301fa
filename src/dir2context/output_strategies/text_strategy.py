"""Plain-text output strategy: indented outline followed by a delimited content dump."""

from typing import List

from dir2context.content_reader import FileContent, Readable, Skipped
from dir2context.file_system_tree.file_system_node import DirectoryNode, FileNode, FileSystemNode

from .base_strategy import OutputStrategy

TREE_HEADER = "--- Directory Tree ---"
CONTENTS_HEADER = "--- File Contents ---"
DELIMITER = "=" * 40
INDENT = "  "
NO_CONTENTS = "(No readable files found or all were excluded/ignored)"


class TextOutputStrategy(OutputStrategy):
    """Output strategy that renders the tree as an indented outline.

    The tree section lists the root name and then every entry indented by two spaces
    per depth level, directories suffixed with "/". The contents section lists each
    file between two delimiter lines followed by its content verbatim:

        ========================================
        File: src/main.py
        ========================================
        print("Hello")

    Skipped files get a placeholder line naming the reason instead of content.

    A blank line follows every entry. Content lacking a final newline is given one so
    that the blank line stays a line of its own; the text format therefore renders
    "hi" and "hi\\n" alike. The XML format keeps the exact text.

    Names that are not valid UTF-8 on disk are shown with U+FFFD in place of the
    undecodable bytes.

    Example:
        >>> root = DirectoryNode("project", root_path="/tmp/project")
        >>> src = DirectoryNode("src", parent=root, relative_path="src")
        >>> _ = FileNode("main.py", parent=src, relative_path="src/main.py")
        >>> print(TextOutputStrategy().format_tree(root), end='')
        project/
          src/
            main.py
        >>> from dir2context.content_reader import SkipReason
        >>> TextOutputStrategy().format_file(src.children[0], Skipped(SkipReason.BINARY)).splitlines()[3]
        '[content skipped: binary]'
    """

    def format_start(self, tree: DirectoryNode) -> str:
        return TREE_HEADER + "\n"

    def format_tree(self, tree: DirectoryNode) -> str:
        lines: List[str] = []
        self._append_node(tree, 0, lines)
        return "".join(line + "\n" for line in lines)

    def _append_node(self, node: FileSystemNode, level: int, lines: List[str]) -> None:
        if isinstance(node, DirectoryNode):
            lines.append(f"{INDENT * level}{node.display_name.rstrip('/')}/")
            for child in node.children:
                self._append_node(child, level + 1, lines)
        elif isinstance(node, FileNode):
            lines.append(f"{INDENT * level}{node.display_name}")
        else:
            raise TypeError(f"Unsupported node type: {type(node).__name__}")

    def format_contents_start(self) -> str:
        return "\n" + CONTENTS_HEADER + "\n"

    def format_file(self, node: FileNode, content: FileContent) -> str:
        if isinstance(content, Readable):
            body = content.text
            if body and not body.endswith("\n"):
                body += "\n"
        elif isinstance(content, Skipped):
            body = f"[content skipped: {content.reason.value}]\n"
        else:
            raise TypeError(f"Unsupported content type: {type(content).__name__}")
        return f"{DELIMITER}\nFile: {node.display_path}\n{DELIMITER}\n{body}\n"

    def format_no_contents(self) -> str:
        return NO_CONTENTS + "\n"

    def format_contents_end(self) -> str:
        return ""

    def format_end(self) -> str:
        return ""

    def get_file_extension(self) -> str:
        return ".txt"

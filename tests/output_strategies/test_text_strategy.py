import pytest

from dir2context.content_reader import Readable, SkipReason, Skipped
from dir2context.file_system_tree.file_system_node import DirectoryNode, FileNode, FileSystemNode
from dir2context.output_strategies.text_strategy import DELIMITER, TextOutputStrategy


@pytest.fixture
def text_strategy():
    """Fixture to provide a clean TextOutputStrategy instance for each test."""
    return TextOutputStrategy()


@pytest.fixture
def sample_tree():
    root = DirectoryNode("root", root_path="/abs/root")
    FileNode("a.txt", parent=root, relative_path="a.txt")
    data = DirectoryNode("data", parent=root, relative_path="data")
    FileNode("b.bin", parent=data, relative_path="data/b.bin")
    DirectoryNode("empty", parent=root, relative_path="empty")
    return root


def test_format_tree(text_strategy, sample_tree):
    assert text_strategy.format_tree(sample_tree) == "root/\n  a.txt\n  data/\n    b.bin\n  empty/\n"


def test_format_tree_single_root(text_strategy):
    assert text_strategy.format_tree(DirectoryNode("project")) == "project/\n"


def test_format_tree_rejects_unknown_nodes(text_strategy):
    root = DirectoryNode("root")
    FileSystemNode("mystery", parent=root, relative_path="mystery")
    with pytest.raises(TypeError, match="Unsupported node type"):
        text_strategy.format_tree(root)


def test_headers(text_strategy, sample_tree):
    assert text_strategy.format_start(sample_tree) == "--- Directory Tree ---\n"
    assert text_strategy.format_contents_start() == "\n--- File Contents ---\n"
    assert text_strategy.format_contents_end() == ""
    assert text_strategy.format_end() == ""


def test_format_readable_file(text_strategy):
    node = FileNode("main.py", relative_path="src/main.py")
    expected = f"{DELIMITER}\nFile: src/main.py\n{DELIMITER}\nprint('hi')\n\n"
    assert text_strategy.format_file(node, Readable("print('hi')\n")) == expected


def test_format_file_adds_missing_final_newline(text_strategy):
    node = FileNode("a.txt", relative_path="a.txt")
    assert text_strategy.format_file(node, Readable("hi")).endswith("\nhi\n\n")


def test_format_empty_file(text_strategy):
    node = FileNode("empty.txt", relative_path="empty.txt")
    assert text_strategy.format_file(node, Readable("")) == f"{DELIMITER}\nFile: empty.txt\n{DELIMITER}\n\n"


@pytest.mark.parametrize("reason", list(SkipReason))
def test_format_skipped_file(text_strategy, reason):
    node = FileNode("b.bin", relative_path="data/b.bin")
    rendered = text_strategy.format_file(node, Skipped(reason, "detail not shown"))
    assert f"[content skipped: {reason.value}]" in rendered
    assert "detail not shown" not in rendered


def test_format_no_contents(text_strategy):
    assert text_strategy.format_no_contents() == "(No readable files found or all were excluded/ignored)\n"


def test_get_file_extension(text_strategy):
    assert text_strategy.get_file_extension() == ".txt"


def test_delimiter_is_forty_equals_signs():
    assert DELIMITER == "=" * 40


def test_format_file_normalizes_missing_final_newline(text_strategy):
    node = FileNode("a.txt", relative_path="a.txt")
    assert text_strategy.format_file(node, Readable("hi")) == text_strategy.format_file(node, Readable("hi\n"))


def test_filesystem_root_is_not_doubled(text_strategy):
    root = DirectoryNode("/", root_path="/")
    DirectoryNode("etc", parent=root, relative_path="etc")
    assert text_strategy.format_tree(root) == "/\n  etc/\n"


def test_undecodable_names_are_replaced(text_strategy):
    root = DirectoryNode("root", root_path="/abs/root")
    leaf = FileNode("caf\udce9.txt", parent=root, relative_path="caf\udce9.txt")

    tree = text_strategy.format_tree(root)
    entry = text_strategy.format_file(leaf, Readable("hi"))

    assert "  caf\ufffd.txt\n" in tree
    assert "File: caf\ufffd.txt\n" in entry
    (tree + entry).encode("utf-8")

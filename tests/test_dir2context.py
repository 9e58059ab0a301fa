import logging
import xml.etree.ElementTree as ET

import pytest

from dir2context.dir2context import Dir2Context
from dir2context.exceptions import ConfigurationError, RootDirectoryError
from dir2context.types import OutputFormat


@pytest.fixture
def temp_directory(tmp_path):
    """Create a temporary directory with some test files."""
    (tmp_path / "file1.txt").write_text("Content of file1")
    (tmp_path / "file2.py").write_text("print('Hello, World!')")
    (tmp_path / "subdir").mkdir()
    (tmp_path / "subdir" / "file3.txt").write_text("Content of file3")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("[core]\n")
    return tmp_path


def test_dir2context_init(temp_directory):
    analyzer = Dir2Context(temp_directory)
    assert analyzer.directory == temp_directory
    assert analyzer.output_format is OutputFormat.TEXT
    assert analyzer.tree.name == temp_directory.name


def test_dir2context_counts(temp_directory):
    analyzer = Dir2Context(temp_directory)
    assert analyzer.file_count == 3
    assert analyzer.directory_count == 1
    assert analyzer.symlink_count == 0


def test_dir2context_respect_gitignore_off_keeps_git_directory(temp_directory):
    analyzer = Dir2Context(temp_directory, respect_gitignore=False)
    assert analyzer.file_count == 4
    assert analyzer.directory_count == 2


def test_dir2context_exclusions(temp_directory):
    analyzer = Dir2Context(temp_directory, exclude_patterns=["*.py", "subdir/"])
    output = analyzer.render()
    assert "file1.txt" in output
    assert "file2.py" not in output
    assert "file3.txt" not in output


def test_dir2context_max_depth(temp_directory):
    analyzer = Dir2Context(temp_directory, max_depth=1)
    assert analyzer.file_count == 2
    assert analyzer.directory_count == 1
    assert "file3.txt" not in analyzer.render()


def test_dir2context_text_render(temp_directory):
    output = Dir2Context(temp_directory).render()
    assert output.startswith("--- Directory Tree ---\n")
    assert "File: subdir/file3.txt" in output
    assert "Content of file3" in output
    assert ".git" not in output
    assert Dir2Context(temp_directory).get_output_file_extension() == ".txt"


@pytest.mark.parametrize("output_format", ["xml", "markup", "XML", OutputFormat.XML])
def test_dir2context_xml_render(temp_directory, output_format):
    analyzer = Dir2Context(temp_directory, output_format=output_format)
    assert analyzer.output_format is OutputFormat.XML
    assert analyzer.get_output_file_extension() == ".xml"

    document = ET.fromstring(analyzer.render().encode("utf-8"))
    paths = [element.get("path") for element in document.find("fileContents")]
    assert paths == ["file1.txt", "file2.py", "subdir/file3.txt"]


def test_dir2context_invalid_format(temp_directory):
    with pytest.raises(ValueError, match="Unsupported output format"):
        Dir2Context(temp_directory, output_format="json")


def test_dir2context_invalid_encoding(temp_directory):
    with pytest.raises(LookupError):
        Dir2Context(temp_directory, encoding="not-a-codec")


def test_dir2context_negative_depth(temp_directory):
    with pytest.raises(ConfigurationError):
        Dir2Context(temp_directory, max_depth=-1)


def test_dir2context_missing_directory(tmp_path):
    with pytest.raises(RootDirectoryError):
        Dir2Context(tmp_path / "does-not-exist")


def test_dir2context_logs_progress(temp_directory, caplog):
    with caplog.at_level(logging.INFO, logger="dir2context"):
        Dir2Context(temp_directory, exclude_patterns=["*.py"])

    assert f"Processing directory: {temp_directory.resolve()}" in caplog.text
    assert "Respecting .gitignore files." in caplog.text
    assert "Applying exclude patterns: *.py" in caplog.text
    assert "Found 2 files in 1 directories (0 symlinks)" in caplog.text


@pytest.mark.parametrize(
    "name,expected",
    [("text", OutputFormat.TEXT), ("Text", OutputFormat.TEXT), ("xml", OutputFormat.XML), ("markup", OutputFormat.XML)],
)
def test_output_format_from_name(name, expected):
    assert OutputFormat.from_name(name) is expected


def test_output_format_unknown():
    with pytest.raises(ValueError, match="Must be one of: text, xml, markup"):
        OutputFormat.from_name("yaml")

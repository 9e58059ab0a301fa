"""Tests for file content loading and classification."""

import logging
from unittest.mock import patch

import pytest

from dir2context.content_reader import (
    Readable,
    SkipReason,
    Skipped,
    classify_content,
    read_content,
    validate_encoding,
)


def test_classify_readable_text():
    assert classify_content(b"hi\n") == Readable("hi\n")


def test_classify_empty_content():
    assert classify_content(b"") == Readable("")


def test_classify_binary():
    content = classify_content(bytes([0, 1, 2]))
    assert isinstance(content, Skipped)
    assert content.reason is SkipReason.BINARY


def test_classify_invalid_encoding():
    content = classify_content(b"caf\xe9 au lait")
    assert isinstance(content, Skipped)
    assert content.reason is SkipReason.INVALID_ENCODING
    assert "utf-8" in content.detail


def test_classify_with_other_encoding():
    assert classify_content(b"caf\xe9", encoding="latin-1") == Readable("café")


def test_skip_reason_values():
    assert [reason.value for reason in SkipReason] == ["binary", "invalid-encoding", "read-error"]


def test_validate_encoding():
    assert validate_encoding("UTF8") == "utf-8"
    with pytest.raises(LookupError, match="not-a-codec"):
        validate_encoding("not-a-codec")


def test_read_content_text_file(tmp_path):
    target = tmp_path / "a.txt"
    target.write_bytes(b"line one\r\nline two")
    assert read_content(target) == Readable("line one\r\nline two")


def test_read_content_binary_file_logs_warning(tmp_path, caplog):
    target = tmp_path / "b.bin"
    target.write_bytes(b"\x00\x01\x02")

    with caplog.at_level(logging.WARNING, logger="dir2context"):
        content = read_content(target, display_path="data/b.bin")

    assert content.reason is SkipReason.BINARY
    assert "Skipping content of 'data/b.bin': binary" in caplog.text


def test_read_content_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="dir2context"):
        content = read_content(tmp_path / "gone.txt")

    assert isinstance(content, Skipped)
    assert content.reason is SkipReason.READ_ERROR
    assert "read-error" in caplog.text


def test_read_content_permission_error(tmp_path):
    target = tmp_path / "secret.txt"
    target.write_text("secret")

    with patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
        content = read_content(target)

    assert content == Skipped(SkipReason.READ_ERROR, "Permission denied")


def test_read_content_directory_is_read_error(tmp_path):
    content = read_content(tmp_path)
    assert isinstance(content, Skipped)
    assert content.reason is SkipReason.READ_ERROR


def test_readable_content_is_not_logged(tmp_path, caplog):
    target = tmp_path / "a.txt"
    target.write_text("hello")

    with caplog.at_level(logging.DEBUG, logger="dir2context"):
        read_content(target)

    assert caplog.records == []

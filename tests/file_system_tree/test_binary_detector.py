"""Tests for binary content detection."""

import pytest

from dir2context.file_system_tree.binary_detector import SNIFF_SIZE, is_binary_content


class TestBinaryContentDetection:
    """Test binary content detection logic."""

    def test_empty_content_is_text(self):
        assert not is_binary_content(b"")

    def test_text_content(self):
        assert not is_binary_content(b"Hello, world!\nThis is a text file.\n")

    def test_null_byte_means_binary(self):
        assert is_binary_content(b"Hello\x00World")

    def test_high_ratio_of_control_bytes(self):
        assert is_binary_content(bytes(range(1, 32)) + b"Some text")

    def test_text_control_bytes_are_allowed(self):
        """Tabs, carriage returns, form feeds and ANSI escapes are common in text."""
        content = b"col1\tcol2\r\n\x0cpage\n\x1b[31mred\x1b[0m\n" * 50
        assert not is_binary_content(content)

    def test_occasional_control_byte_is_tolerated(self):
        content = b"a" * 1000 + b"\x01"
        assert not is_binary_content(content)

    def test_utf8_text_is_not_binary(self):
        assert not is_binary_content("café 日本語 \U0001f600\n".encode("utf-8"))

    def test_latin1_bytes_are_left_to_the_decoder(self):
        assert not is_binary_content(b"caf\xe9\n")

    def test_only_leading_bytes_are_inspected(self):
        content = b"a" * SNIFF_SIZE + b"\x00"
        assert not is_binary_content(content)
        assert is_binary_content(content, sniff_size=SNIFF_SIZE + 1)

    @pytest.mark.parametrize(
        "content",
        [
            b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR",
            b"\x7fELF\x02\x01\x01\x00",
            b"PK\x03\x04\x14\x00\x00\x00",
        ],
    )
    def test_common_binary_signatures(self, content):
        assert is_binary_content(content)

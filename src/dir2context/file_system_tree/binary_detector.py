"""Binary content detection utilities."""

# Number of leading bytes inspected before attempting a full decode
SNIFF_SIZE = 8192

# Control bytes that legitimately occur in text: backspace, tab, newline,
# form feed, carriage return and escape (ANSI colour codes in logs)
TEXT_CONTROL_BYTES = frozenset({8, 9, 10, 12, 13, 27})

# Share of atypical control bytes above which a sample is considered binary
CONTROL_BYTE_THRESHOLD = 0.01


def is_binary_content(data: bytes, sniff_size: int = SNIFF_SIZE) -> bool:
    """Detect binary content by inspecting the leading bytes of a file.

    This is a cheap sniff run before any decoding, so that large binary assets are
    rejected without decoding their whole content:
       - Any null byte means binary
       - More than 1% of control bytes atypical of text means binary

    Bytes of 0x80 and above are not judged here; whether they form valid text is left
    to the decoder.

    Args:
        data: File content, or at least its first ``sniff_size`` bytes.
        sniff_size: Number of leading bytes to analyze. Defaults to 8192.

    Returns:
        True if the content appears to be binary, False if it may be text.

    Example:
        >>> is_binary_content(b"hello world\\n")
        False
        >>> is_binary_content(bytes([0, 1, 2]))
        True
        >>> is_binary_content(b"")
        False
    """
    chunk = data[:sniff_size]

    # Empty files are text
    if not chunk:
        return False

    # Check for null bytes - common indicator of binary files
    if b"\0" in chunk:
        return True

    control_bytes = sum(1 for byte in chunk if (byte < 32 or byte == 127) and byte not in TEXT_CONTROL_BYTES)
    return control_bytes / len(chunk) > CONTROL_BYTE_THRESHOLD

"""File content loading and classification.

Every file retained in the tree is read in full and classified as either readable
text or skipped content. Classification never raises: binary data, undecodable data
and I/O failures all produce a Skipped result and a warning, and the run goes on.
"""

import codecs
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .file_system_tree.binary_detector import is_binary_content
from .types import PathType

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class SkipReason(str, Enum):
    """Why a file's content is left out of the output.

    Values:
        BINARY: The content looks like binary data
        INVALID_ENCODING: The content is not valid text in the required encoding
        READ_ERROR: The file could not be read
    """

    BINARY = "binary"
    INVALID_ENCODING = "invalid-encoding"
    READ_ERROR = "read-error"


@dataclass(frozen=True)
class Readable:
    """Content that decoded cleanly as text."""

    text: str


@dataclass(frozen=True)
class Skipped:
    """Content that is replaced by a skip marker in the output.

    Attributes:
        reason: Classification of the failure.
        detail: Human-readable explanation, used in the warning.
    """

    reason: SkipReason
    detail: Optional[str] = None


FileContent = Union[Readable, Skipped]


def validate_encoding(encoding: str) -> str:
    """Fail fast on an unknown codec, before any file is read.

    Returns:
        The canonical codec name.

    Raises:
        LookupError: If the encoding is not available.

    Example:
        >>> validate_encoding("UTF8")
        'utf-8'
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise LookupError(f"Encoding '{encoding}' is not available") from e


def classify_content(data: bytes, encoding: str = DEFAULT_ENCODING) -> FileContent:
    """Classify raw file bytes as readable text, binary or invalid encoding.

    This is a pure function: the binary sniff looks at the leading bytes only, and
    full decoding is attempted just for content that passes it.

    Args:
        data: The complete file content.
        encoding: The required text encoding. Defaults to UTF-8.

    Returns:
        Readable with the decoded text, or Skipped with the reason.

    Example:
        >>> classify_content(b"hi")
        Readable(text='hi')
        >>> classify_content(bytes([0, 1, 2])).reason.value
        'binary'
        >>> classify_content(b"caf\\xe9").reason.value
        'invalid-encoding'
    """
    if is_binary_content(data):
        return Skipped(SkipReason.BINARY, "binary content detected")
    try:
        return Readable(data.decode(encoding))
    except UnicodeDecodeError as e:
        return Skipped(SkipReason.INVALID_ENCODING, f"not valid {encoding}: {e.reason} at byte {e.start}")


def read_content(path: PathType, encoding: str = DEFAULT_ENCODING, display_path: Optional[str] = None) -> FileContent:
    """Read a file in full and classify its content.

    Any skip is logged as a warning identifying the file and the reason. There is no
    size cap; very large files are read entirely into memory.

    Args:
        path: Location of the file on disk. Symlinks are read through.
        encoding: The required text encoding. Defaults to UTF-8.
        display_path: Name used in warnings, typically the root-relative path.
            Defaults to ``path``.

    Returns:
        The classified content. Never raises for I/O or decoding problems.

    Example:
        >>> content = read_content("README.md")  # doctest: +SKIP
        >>> isinstance(content, Readable)  # doctest: +SKIP
        True
    """
    name = display_path if display_path is not None else str(path)
    try:
        with open(path, "rb") as file:
            data = file.read()
    except OSError as e:
        content: FileContent = Skipped(SkipReason.READ_ERROR, e.strerror or str(e))
    else:
        content = classify_content(data, encoding)

    if isinstance(content, Skipped):
        logger.warning("Skipping content of '%s': %s (%s)", name, content.reason.value, content.detail)
    return content

from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class OutputFormat(str, Enum):
    """Enumeration of the supported serializations of a filtered tree.

    Attributes:
        TEXT: Indented outline followed by delimited file contents.
        XML: Nested XML elements with file contents in CDATA sections.
    """

    TEXT = "text"
    XML = "xml"

    @classmethod
    def from_name(cls, name: Union[str, "OutputFormat"]) -> "OutputFormat":
        """Resolve a format name, accepting ``markup`` as an alias for ``xml``.

        Example:
            >>> OutputFormat.from_name("markup")
            <OutputFormat.XML: 'xml'>
            >>> OutputFormat.from_name("TEXT")
            <OutputFormat.TEXT: 'text'>
        """
        if isinstance(name, OutputFormat):
            return name
        normalized = name.lower()
        if normalized == "markup":
            return cls.XML
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported output format: {name}. Must be one of: text, xml, markup")

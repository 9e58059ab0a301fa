"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from pathspec.patterns import GitWildMatchPattern  # type: ignore

from dir2context.exceptions import InvalidPatternError
from dir2context.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)

USER_SUPPLIED = "user-supplied"


@dataclass(frozen=True)
class ScopedPattern:
    """A compiled gitignore pattern together with its scope and provenance.

    A pattern loaded from an ignore file in directory ``base`` only applies to paths
    below ``base`` and is matched against the path relative to ``base``, exactly as
    git does. User-supplied patterns have an empty base and apply to the whole tree.

    Attributes:
        text: The pattern as written.
        pattern: Pattern compiled by pathspec.
        base: Directory the pattern is scoped to, relative to the root ("" for root).
        source: Provenance, either an ignore file path or "user-supplied".
        directory_only: True if the pattern ends in "/" and only matches directories.

    Example:
        >>> scoped = ScopedPattern.compile("*.log", base="logs")
        >>> scoped.match("logs/app.log", is_dir=False)
        True
        >>> scoped.match("app.log", is_dir=False) is None
        True
        >>> ScopedPattern.compile("!keep.log").match("keep.log", is_dir=False)
        False
    """

    text: str
    pattern: GitWildMatchPattern
    base: str = ""
    source: str = USER_SUPPLIED
    directory_only: bool = False

    @classmethod
    def compile(cls, text: str, base: str = "", source: str = USER_SUPPLIED) -> "ScopedPattern":
        """Compile a single gitignore pattern line.

        Args:
            text: The pattern line, e.g. "*.pyc", "build/", "!important.txt".
            base: Directory the pattern is scoped to, relative to the root.
            source: Provenance of the pattern.

        Returns:
            The compiled pattern. Blank lines and comments compile to patterns that
            never match.

        Raises:
            InvalidPatternError: If pathspec rejects the pattern.
        """
        try:
            pattern = GitWildMatchPattern(text)
        except ValueError as e:
            raise InvalidPatternError(text, source, str(e)) from e
        return cls(
            text=text,
            pattern=pattern,
            base=base.strip("/"),
            source=source,
            directory_only=text.strip().endswith("/"),
        )

    @property
    def is_active(self) -> bool:
        """False for blank lines and comments, which never match anything."""
        return self.pattern.include is not None

    @property
    def is_negation(self) -> bool:
        return self.pattern.include is False

    def match(self, path: str, is_dir: bool) -> Optional[bool]:
        """Match a root-relative path against this pattern.

        Args:
            path: Path relative to the processed root, using forward slashes.
            is_dir: True if the path names a directory.

        Returns:
            True if the pattern excludes the path, False if it re-includes it (a
            negation), or None if the pattern does not apply.
        """
        if not self.is_active:
            return None

        if self.base:
            prefix = self.base + "/"
            if not path.startswith(prefix):
                return None
            path = path[len(prefix) :]  # noqa: E203

        # Directory-only patterns compile to a regex that requires the trailing slash
        candidate = path + "/" if is_dir and self.directory_only else path
        if self.pattern.match_file(candidate) is None:
            return None
        return bool(self.pattern.include)

    def __str__(self) -> str:
        location = f"{self.source} (scope: /{self.base})" if self.base else self.source
        return f"'{self.text}' from {location}"


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Implementation of exclusion rules using .gitignore pattern syntax.

    This class implements the BaseExclusionRules interface using standard .gitignore pattern
    matching rules. It uses the pathspec library to compile each pattern the same way that
    Git interprets it.

    The rules support all standard .gitignore syntax including:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Anchored patterns (starting with /)
    - Directory-specific patterns (ending in /)
    - Negation patterns (starting with !)
    - Double-asterisk matching (**)
    - Comment lines (starting with #)

    Instances are immutable. Patterns are kept in the order they were added and the
    last matching pattern decides, so a later negation re-includes a path that an earlier
    pattern excluded. ``extended()`` returns a new rule list with more patterns appended,
    which lets a directory walk push the rules of a nested ignore file for one subtree
    without affecting its siblings.

    Example:
        >>> rules = GitIgnoreExclusionRules.from_patterns(["node_modules/", "*.log", "!keep.log"])
        >>> rules.exclude("node_modules", is_dir=True)
        True
        >>> rules.exclude("app.log")
        True
        >>> rules.exclude("keep.log")
        False

    Note:
        The paths provided to exclude() should use forward slashes (/) as path separators,
        even on Windows systems, to match Git's behavior.
    """

    def __init__(self, patterns: Iterable[ScopedPattern] = ()) -> None:
        self._patterns: Tuple[ScopedPattern, ...] = tuple(patterns)

    @classmethod
    def from_patterns(
        cls, lines: Iterable[str], base: str = "", source: str = USER_SUPPLIED
    ) -> "GitIgnoreExclusionRules":
        """Compile patterns strictly; any malformed pattern is an error.

        Args:
            lines: Pattern lines in gitignore syntax.
            base: Directory the patterns are scoped to, relative to the root.
            source: Provenance recorded on every pattern.

        Raises:
            InvalidPatternError: On the first pattern pathspec cannot compile.

        Example:
            >>> rules = GitIgnoreExclusionRules.from_patterns(["*.pyc", "# comment", ""])
            >>> len(rules)
            1
        """
        compiled = (ScopedPattern.compile(line, base=base, source=source) for line in lines)
        return cls(pattern for pattern in compiled if pattern.is_active)

    @classmethod
    def from_file(cls, rules_file: PathType, base: str = "") -> "GitIgnoreExclusionRules":
        """Load patterns from an ignore file.

        Lines pathspec cannot compile are skipped with a warning, as git does, rather
        than aborting the run.

        Args:
            rules_file: Path to a file containing .gitignore patterns.
            base: Directory containing the ignore file, relative to the root.

        Raises:
            FileNotFoundError: If the rules file does not exist.
            OSError: If the rules file cannot be read.
        """
        path = Path(rules_file)
        if not path.exists():
            raise FileNotFoundError(f"Rules file not found: {path}")

        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()

        patterns = []
        for line_number, line in enumerate(lines, start=1):
            try:
                pattern = ScopedPattern.compile(line, base=base, source=str(path))
            except InvalidPatternError as e:
                logger.warning("Ignoring line %d of '%s': %s", line_number, path, e)
                continue
            if pattern.is_active:
                patterns.append(pattern)
        return cls(patterns)

    @property
    def patterns(self) -> Tuple[ScopedPattern, ...]:
        return self._patterns

    def extended(self, other: "GitIgnoreExclusionRules") -> "GitIgnoreExclusionRules":
        """Return new rules with the patterns of ``other`` evaluated after these."""
        if not other._patterns:
            return self
        return GitIgnoreExclusionRules(self._patterns + other._patterns)

    def decide(self, path: str, is_dir: bool = False) -> Optional[ScopedPattern]:
        """Find the pattern that decides the fate of a path.

        Returns:
            The last pattern matching the path, or None if no pattern matches.
        """
        for pattern in reversed(self._patterns):
            if pattern.match(path, is_dir) is not None:
                return pattern
        return None

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """Check if a path should be excluded based on the loaded .gitignore patterns.

        Args:
            path: Root-relative path with forward slashes.
            is_dir: True if the path names a directory.

        Returns:
            bool: True if the last matching pattern is a non-negated pattern, False if
                it is a negation or no pattern matches.

        Example:
            >>> rules = GitIgnoreExclusionRules.from_patterns(["*.pyc", "!important.pyc"])
            >>> rules.exclude("test.pyc")
            True
            >>> rules.exclude("important.pyc")
            False
        """
        decided = self.decide(path, is_dir)
        return decided is not None and not decided.is_negation

    def has_rules(self) -> bool:
        return bool(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[ScopedPattern]:
        return iter(self._patterns)

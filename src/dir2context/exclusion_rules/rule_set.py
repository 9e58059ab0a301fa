"""Layered exclusion rules scoped to the directory being traversed."""

import logging
from typing import Iterable, Optional

from dir2context.types import PathType

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules, ScopedPattern

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"

# Applied at the root whenever ignore files are honored
DEFAULT_IGNORE_PATTERNS = (".git/",)
DEFAULT_IGNORE_SOURCE = "built-in default"


class ExclusionRuleSet(BaseExclusionRules):
    """Ignore-file rules and user-supplied patterns combined into one decision.

    The rule set holds two tiers, each an ordered list of gitignore patterns:

    1. Ignore-file rules, in the order they were discovered. Because a walk descends
       from ancestors to descendants, rules of an ancestor's ignore file always come
       before those of a nested one.
    2. User-supplied patterns, root-scoped, always evaluated after every ignore-file
       rule.

    Both tiers form a single flattened list and the last matching pattern wins, so a
    user pattern overrides any ignore-file rule it matches, and a user negation
    (``!pattern``) re-includes a path an ignore file excluded.

    Rule sets are immutable: ``with_ignore_file()`` returns a new set for the subtree
    below the ignore file's directory while the caller keeps using its own. Leaving a
    subtree therefore needs no explicit pop.

    Example:
        >>> rules = ExclusionRuleSet(user_rules=GitIgnoreExclusionRules.from_patterns(["*.tmp"]))
        >>> rules.exclude("build/cache.tmp")
        True
        >>> rules.exclude("src", is_dir=True)
        False
    """

    def __init__(
        self,
        ignore_file_rules: Optional[GitIgnoreExclusionRules] = None,
        user_rules: Optional[GitIgnoreExclusionRules] = None,
    ) -> None:
        self.ignore_file_rules = ignore_file_rules or GitIgnoreExclusionRules()
        self.user_rules = user_rules or GitIgnoreExclusionRules()

    @classmethod
    def create(cls, respect_gitignore: bool = True, user_patterns: Iterable[str] = ()) -> "ExclusionRuleSet":
        """Build the root rule set for a run.

        Args:
            respect_gitignore: Whether ignore files are honored. When False no default
                rules apply either, only the user patterns.
            user_patterns: Additional gitignore-style patterns, in order.

        Raises:
            InvalidPatternError: If a user pattern is malformed.
        """
        defaults = GitIgnoreExclusionRules()
        if respect_gitignore:
            defaults = GitIgnoreExclusionRules.from_patterns(DEFAULT_IGNORE_PATTERNS, source=DEFAULT_IGNORE_SOURCE)
        return cls(defaults, GitIgnoreExclusionRules.from_patterns(user_patterns))

    def with_ignore_file(self, rules_file: PathType, base: str) -> "ExclusionRuleSet":
        """Return a rule set that also honors the ignore file found in ``base``.

        An ignore file that cannot be read is reported as a warning and leaves the
        rules unchanged.

        Args:
            rules_file: Path of the ignore file on disk.
            base: Root-relative path of the directory containing it.
        """
        try:
            loaded = GitIgnoreExclusionRules.from_file(rules_file, base=base)
        except OSError as e:
            logger.warning("Could not read ignore file '%s': %s (skipping its rules)", rules_file, e)
            return self
        if not loaded.has_rules():
            return self
        return ExclusionRuleSet(self.ignore_file_rules.extended(loaded), self.user_rules)

    def decide(self, path: str, is_dir: bool = False) -> Optional[ScopedPattern]:
        """Return the last pattern across both tiers that matches the path."""
        decided = self.user_rules.decide(path, is_dir)
        if decided is None:
            decided = self.ignore_file_rules.decide(path, is_dir)
        return decided

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        decided = self.decide(path, is_dir)
        return decided is not None and not decided.is_negation

    def has_rules(self) -> bool:
        return self.ignore_file_rules.has_rules() or self.user_rules.has_rules()


def is_excluded(relative_path: str, is_directory: bool, applicable_rules: BaseExclusionRules) -> bool:
    """Decide whether a root-relative path is excluded by the applicable rules.

    Exclusion of an ancestor directory is not re-evaluated here; a walk never
    descends into an excluded directory, so its descendants are never asked about.

    Example:
        >>> rules = ExclusionRuleSet.create(user_patterns=["*.bin", "!keep.bin"])
        >>> is_excluded("data/b.bin", False, rules)
        True
        >>> is_excluded("keep.bin", False, rules)
        False
        >>> is_excluded(".git", True, rules)
        True
    """
    return applicable_rules.exclude(relative_path, is_directory)

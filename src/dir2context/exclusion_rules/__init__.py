"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules, ScopedPattern
from .rule_set import ExclusionRuleSet, is_excluded

__all__ = [
    "BaseExclusionRules",
    "ExclusionRuleSet",
    "GitIgnoreExclusionRules",
    "ScopedPattern",
    "is_excluded",
]

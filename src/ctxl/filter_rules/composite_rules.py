"""Composite exclusion rules for combining multiple rule sources."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Exclusion rules that combine several rule objects with a logical OR.

    A path is excluded if ANY constituent rule excludes it. This is how preset and
    ad-hoc exclude patterns are unioned with the patterns of a project's ignore file:
    a negation in the ignore file only affects the ignore file's own patterns.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent exclusion rules.

    Example:
        >>> from ctxl.filter_rules.git_rules import GitIgnoreExclusionRules
        >>> composite = CompositeExclusionRules([
        ...     GitIgnoreExclusionRules(patterns=["*.txt"]),
        ...     GitIgnoreExclusionRules(patterns=["*.log", "!keep.txt"]),
        ... ])
        >>> composite.exclude("keep.txt")
        True
        >>> composite.exclude("main.py")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Raises:
            ValueError: If rules is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

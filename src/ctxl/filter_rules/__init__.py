"""Include and exclude rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .combiner import DEFAULT_EXCLUDES, HIDDEN_PATTERN, FilterRuleSet, combine_presets, parse_filter_patterns
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .include_rules import InclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "DEFAULT_EXCLUDES",
    "FilterRuleSet",
    "GitIgnoreExclusionRules",
    "HIDDEN_PATTERN",
    "InclusionRules",
    "combine_presets",
    "parse_filter_patterns",
]

"""Combination of presets and ad-hoc filters into one effective rule set."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ctxl.presets.store import PresetStore

logger = logging.getLogger(__name__)

# Excludes every dotfile and dot-directory
HIDDEN_PATTERN = ".*"

DEFAULT_EXCLUDES: Tuple[str, ...] = ("node_modules", HIDDEN_PATTERN)


@dataclass(frozen=True)
class FilterRuleSet:
    """Effective include and exclude patterns for one invocation.

    Both pattern tuples are sorted and duplicate-free. An empty include tuple means
    every file that is not excluded is included.

    Example:
        >>> FilterRuleSet.create(["*.py", "*.md", "*.py"], ["build"])
        FilterRuleSet(include_globs=('*.md', '*.py'), exclude_globs=('build',))
    """

    include_globs: Tuple[str, ...] = ()
    exclude_globs: Tuple[str, ...] = ()

    @classmethod
    def create(cls, include_globs: Iterable[str] = (), exclude_globs: Iterable[str] = ()) -> "FilterRuleSet":
        return cls(tuple(sorted(set(include_globs))), tuple(sorted(set(exclude_globs))))

    @classmethod
    def default(cls) -> "FilterRuleSet":
        """Rule set holding only the default exclusions."""
        return cls.create(exclude_globs=DEFAULT_EXCLUDES)


def parse_filter_patterns(filter_string: Optional[str]) -> Tuple[List[str], List[str]]:
    """Split an ad-hoc filter string into include and exclude patterns.

    Tokens are separated by whitespace. A token starting with ``!`` is an exclude
    pattern (the ``!`` is stripped); any other token is an include pattern.

    Args:
        filter_string: The filter string, e.g. ``"*.py !tests"``. None or empty yields no patterns.

    Returns:
        A pair of (include patterns, exclude patterns) in token order.

    Example:
        >>> parse_filter_patterns("*.py !tests *.md !*.lock")
        (['*.py', '*.md'], ['tests', '*.lock'])
        >>> parse_filter_patterns("")
        ([], [])
    """
    include_patterns: List[str] = []
    exclude_patterns: List[str] = []
    if not filter_string:
        return include_patterns, exclude_patterns

    for token in filter_string.split():
        if token.startswith("!"):
            # A lone "!" would become an empty pattern
            if len(token) > 1:
                exclude_patterns.append(token[1:])
        else:
            include_patterns.append(token)

    logger.debug("Parsed filter patterns - include: %s, exclude: %s", include_patterns, exclude_patterns)
    return include_patterns, exclude_patterns


def combine_presets(
    preset_names: Iterable[str],
    filter_string: Optional[str] = None,
    store: Optional[PresetStore] = None,
) -> FilterRuleSet:
    """Merge the selected presets and an ad-hoc filter string into one rule set.

    The exclude set always starts with DEFAULT_EXCLUDES (``node_modules`` and the hidden
    entry rule). Each known preset contributes its include and exclude patterns; unknown
    preset names are logged and skipped. Filter tokens are added last.

    Args:
        preset_names: Names of presets to apply.
        filter_string: Optional ad-hoc filter string, see parse_filter_patterns().
        store: Preset store to resolve names against. Defaults to built-in presets only.

    Returns:
        The combined, sorted FilterRuleSet.

    Raises:
        PresetParseError: If the store's user preset file is malformed.

    Example:
        >>> rules = combine_presets(["go", "cobol"], "!*_test.go", PresetStore(preset_file=None))
        >>> rules.include_globs
        ('*.go',)
        >>> rules.exclude_globs
        ('*_test.go', '.*', 'node_modules', 'vendor')
    """
    if store is None:
        store = PresetStore(preset_file=None)
    presets = store.get_effective_presets()

    include = set()
    exclude = set(DEFAULT_EXCLUDES)

    for name in preset_names:
        preset = presets.get(name)
        if preset is None:
            logger.warning(
                "Preset '%s' not found. Skipping. Available presets: %s", name, ", ".join(store.names())
            )
            continue
        include.update(preset.include)
        exclude.update(preset.exclude)

    filter_include, filter_exclude = parse_filter_patterns(filter_string)
    include.update(filter_include)
    exclude.update(filter_exclude)

    rules = FilterRuleSet.create(include, exclude)
    logger.debug("Combined rules - include: %s, exclude: %s", rules.include_globs, rules.exclude_globs)
    return rules

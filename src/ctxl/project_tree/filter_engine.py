"""Per-entry filter decisions shared by every traversal of a project."""

import logging
from pathlib import Path
from typing import Optional

from ctxl.filter_rules.combiner import HIDDEN_PATTERN, FilterRuleSet
from ctxl.filter_rules.composite_rules import CompositeExclusionRules
from ctxl.filter_rules.git_rules import GitIgnoreExclusionRules
from ctxl.filter_rules.include_rules import InclusionRules
from ctxl.types import DirEntry, PathType

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".gitignore"


class FilterEngine:
    """Decides which directory entries are in scope for one scan root.

    The engine is built once per invocation and consulted by every traversal of
    the project, which keeps the emitted file set and the rendered tree in agreement.
    Rules are applied in this order:

    1. Dotfile rule: when include_dotfiles is False, an entry whose name starts with
       a dot is out of scope. No include pattern can override this.
    2. Exclude rule: an entry whose relative path matches an exclude pattern of the
       rule set or a pattern of the ignore file is out of scope. Directories are
       pruned, so nothing below them is visited.
    3. Include rule: a file is in scope only if it matches an include pattern, unless
       the include set is empty. Directories are always descended.

    When include_dotfiles is True the built-in hidden-entry exclusion (``.*``) is
    lifted so the flag has an effect; every other exclude pattern still applies.

    Attributes:
        rules (FilterRuleSet): The combined include and exclude patterns.
        ignore_file (Optional[Path]): Ignore file whose patterns were loaded, if any.
        include_dotfiles (bool): Whether dot-prefixed entries may be visited.
        exclusion_rules (CompositeExclusionRules): Union of rule-set and ignore-file exclusions.
        inclusion_rules (InclusionRules): File selection patterns.

    Example:
        >>> from ctxl.filter_rules.combiner import FilterRuleSet
        >>> engine = FilterEngine(FilterRuleSet.create(["*.py"], ["build"]))
        >>> engine.allows_path("src/app.py", is_directory=False)
        True
        >>> engine.allows_path("build", is_directory=True)
        False
        >>> engine.allows_path("docs", is_directory=True)
        True
        >>> engine.allows_path("docs/index.md", is_directory=False)
        False
    """

    def __init__(
        self,
        rules: FilterRuleSet,
        ignore_file: Optional[PathType] = None,
        include_dotfiles: bool = False,
    ) -> None:
        self.rules = rules
        self.ignore_file = Path(ignore_file) if ignore_file is not None else None
        self.include_dotfiles = include_dotfiles

        pattern_rules = GitIgnoreExclusionRules(
            patterns=[p for p in rules.exclude_globs if not (include_dotfiles and p == HIDDEN_PATTERN)]
        )
        # Ignore-file patterns are loaded once and kept apart so their negations
        # cannot re-include paths excluded by the rule set
        ignore_rules = GitIgnoreExclusionRules(self.ignore_file, missing_ok=True)
        self.exclusion_rules = CompositeExclusionRules([pattern_rules, ignore_rules])
        self.inclusion_rules = InclusionRules(rules.include_globs)

    @classmethod
    def for_root(
        cls,
        root: PathType,
        rules: FilterRuleSet,
        ignore_file: Optional[PathType] = None,
        include_dotfiles: bool = False,
    ) -> "FilterEngine":
        """Build an engine for a scan root, defaulting the ignore file to ``<root>/.gitignore``."""
        if ignore_file is None:
            ignore_file = Path(root) / DEFAULT_IGNORE_FILE
        return cls(rules, ignore_file=ignore_file, include_dotfiles=include_dotfiles)

    def is_hidden(self, name: str) -> bool:
        return not self.include_dotfiles and name.startswith(".")

    def is_excluded(self, relative_path: str, is_directory: bool) -> bool:
        if self.exclusion_rules.exclude(relative_path):
            return True
        # Directory-only patterns such as "build/" need the trailing slash to match
        return is_directory and self.exclusion_rules.exclude(relative_path + "/")

    def allows_path(self, relative_path: str, is_directory: bool) -> bool:
        """Apply the dotfile, exclude and include rules to a relative path."""
        name = relative_path.rsplit("/", 1)[-1]
        if self.is_hidden(name):
            logger.debug("Skipping dotfile: %s", relative_path)
            return False
        if self.is_excluded(relative_path, is_directory):
            logger.debug("Ignored by patterns: %s", relative_path)
            return False
        if not is_directory and not self.inclusion_rules.include(relative_path):
            logger.debug("Not included by patterns: %s", relative_path)
            return False
        return True

    def allows(self, entry: DirEntry) -> bool:
        """Decide whether a directory entry is visited (directories) or emitted (files)."""
        return self.allows_path(entry.relative_path, entry.is_directory)

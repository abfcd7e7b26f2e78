"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from ctxl.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Paths are matched with the pathspec library the same way Git matches them:
    basic globs, directory-only patterns ending in ``/``, negation with ``!``,
    ``**`` and comment lines are all supported. A pattern without a slash matches
    at any depth, so ``node_modules`` excludes ``web/node_modules`` as well.

    Patterns can come from ignore files (one pattern per line, blank lines and
    comments skipped) or be passed directly as strings. Later patterns may
    override earlier ones through negation.

    Attributes:
        lines (List[str]): Pattern lines in the order they were added.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules(patterns=["*.log", "build/"])
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("src/main.py")
        False
        >>> GitIgnoreExclusionRules("/no/such/.gitignore", missing_ok=True).exclude("app.log")
        False

    Note:
        The paths provided to exclude() should use forward slashes (/) as path separators,
        even on Windows systems, to match Git's behavior.
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        *,
        patterns: Iterable[str] = (),
        missing_ok: bool = False,
    ):
        """Initialize rules from ignore files and literal patterns.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.
            patterns: Individual patterns added after the files' patterns.
            missing_ok: Treat a missing rules file as an empty one instead of failing.

        Raises:
            FileNotFoundError: If a rules file does not exist and missing_ok is False.
        """
        self.lines: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self.lines)

        if rules_files is not None:
            self.load_rules(rules_files, missing_ok=missing_ok)
        if patterns:
            self.lines.extend(patterns)
            self._compile()

    def exclude(self, path: str) -> bool:
        """Check if a path matches the loaded patterns.

        The path is matched exactly as provided - no path normalization is performed.
        """
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]], missing_ok: bool = False) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.
            missing_ok: Skip files that do not exist instead of raising.

        Raises:
            FileNotFoundError: If a rules file does not exist and missing_ok is False.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.is_file():
                if missing_ok:
                    logger.debug("Ignore file %s not found, no patterns loaded", path)
                    continue
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                lines = [line for line in f.read().splitlines() if line.strip()]

            self.lines.extend(lines)
            self._compile()
            logger.debug("Read %d patterns from %s", len(lines), path)

    def _compile(self) -> None:
        # PathSpec compiles its patterns up front, so it is rebuilt on every change
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self.lines)

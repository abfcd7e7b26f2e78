"""Inclusion rules selecting which files are emitted."""

from typing import Iterable

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore


class InclusionRules:
    """Gitignore-style patterns selecting files for output.

    An empty rule set is open: it includes every path. Inclusion applies to files
    only; directories are always traversed so that matching files nested in
    non-matching directories are still found.

    Example:
        >>> rules = InclusionRules(["*.py", "Dockerfile"])
        >>> rules.include("pkg/app.py"), rules.include("README.md")
        (True, False)
        >>> InclusionRules([]).include("anything.bin")
        True
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = tuple(patterns)
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self.patterns)

    @property
    def is_open(self) -> bool:
        return not self.patterns

    def include(self, path: str) -> bool:
        if self.is_open:
            return True
        return self.spec.match_file(path)

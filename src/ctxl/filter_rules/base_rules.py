from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path exclusion rules.

    Implementations decide whether a path, given relative to the scan root with ``/``
    separators, should be left out of traversal.

    Example:
        >>> from ctxl.filter_rules.git_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules(patterns=['*.pyc'])
        >>> rules.exclude('pkg/module.pyc')
        True
        >>> rules.exclude('pkg/module.py')
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Path relative to the scan root. Directories may be passed with a
                trailing slash so that directory-only patterns (``build/``) apply.

        Returns:
            bool: True if the path should be excluded, False otherwise.
        """
        pass

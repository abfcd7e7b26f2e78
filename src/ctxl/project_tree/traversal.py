"""Depth-first traversal of a project directory driven by a visit callback.

Every consumer that needs to know which entries are in scope (the file scanner,
the tree renderer, project type detection) walks the filesystem through
traverse(). The scope decision is made in one place, the FilterEngine, so all
consumers agree on what a project contains.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Tuple

from ctxl.types import DirEntry, PathType

from .filter_engine import FilterEngine
from .permission_action import PermissionAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Visit:
    """One in-scope entry delivered to a visitor.

    Attributes:
        entry: The directory entry.
        lineage: For the entry and each of its ancestors below the root, whether it is
            the last in-scope entry among its siblings. ``lineage[-1]`` refers to the
            entry itself; ``len(lineage) - 1`` is its depth.
    """

    entry: DirEntry
    lineage: Tuple[bool, ...]

    @property
    def depth(self) -> int:
        return len(self.lineage) - 1

    @property
    def is_last(self) -> bool:
        return self.lineage[-1]


Visitor = Callable[[Visit], None]


def sort_key(entry: DirEntry) -> Tuple[bool, str]:
    """Directories first, then files, each group ordered by name."""
    return (not entry.is_directory, entry.name)


def traverse(
    root: PathType,
    engine: FilterEngine,
    visit: Visitor,
    permission_action: PermissionAction = PermissionAction.IGNORE,
) -> None:
    """Walk ``root`` depth-first and call ``visit`` for every in-scope entry.

    A directory is visited before its contents. Out-of-scope directories are pruned.
    Symbolic links to directories are followed; there is no cycle detection, so a
    link back to an ancestor makes the traversal run until resources are exhausted.

    Args:
        root: Directory to walk.
        engine: Filter engine deciding which entries are in scope.
        visit: Callback invoked once per in-scope entry, in output order.
        permission_action: What to do when a directory cannot be listed.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.
        PermissionError: If a directory cannot be listed and permission_action is RAISE.

    Example:
        >>> import tempfile
        >>> from ctxl.filter_rules.combiner import FilterRuleSet
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     os.mkdir(os.path.join(tmp, "pkg"))
        ...     for name in ("pkg/mod.py", "setup.py", ".env"):
        ...         open(os.path.join(tmp, name), "w").close()
        ...     seen = []
        ...     traverse(tmp, FilterEngine(FilterRuleSet.default()), lambda v: seen.append(v.entry.relative_path))
        >>> seen
        ['pkg', 'pkg/mod.py', 'setup.py']
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Root path does not exist: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root_path}")

    _walk(root_path, "", (), engine, visit, permission_action)


def _walk(
    directory: Path,
    relative_dir: str,
    lineage: Tuple[bool, ...],
    engine: FilterEngine,
    visit: Visitor,
    permission_action: PermissionAction,
) -> None:
    logger.debug("Scanning directory: %s", directory)
    entries = _list_entries(directory, relative_dir, engine, permission_action)

    for i, entry in enumerate(entries):
        child_lineage = lineage + (i == len(entries) - 1,)
        visit(Visit(entry, child_lineage))
        if entry.is_directory:
            _walk(entry.absolute_path, entry.relative_path, child_lineage, engine, visit, permission_action)


def _list_entries(
    directory: Path, relative_dir: str, engine: FilterEngine, permission_action: PermissionAction
) -> List[DirEntry]:
    """List the in-scope entries of one directory in output order."""
    try:
        names = os.listdir(directory)
    except PermissionError as e:
        if permission_action == PermissionAction.RAISE:
            raise PermissionError(f"Access denied to {directory}: {e}")
        logger.warning("Skipping unreadable directory %s: %s", directory, e)
        return []

    entries = []
    for name in names:
        path = directory / name
        entry = DirEntry(
            absolute_path=path,
            relative_path=f"{relative_dir}/{name}" if relative_dir else name,
            is_directory=_is_directory(path),
            is_dotfile=name.startswith("."),
        )
        if engine.allows(entry):
            entries.append(entry)

    return sorted(entries, key=sort_key)


def _is_directory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        # If we can't stat it, treat it as a non-directory
        return False

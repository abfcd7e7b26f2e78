"""Collection of file contents from a filtered project tree."""

import logging
from pathlib import Path
from typing import List, Optional

from ctxl.filter_rules.combiner import FilterRuleSet
from ctxl.types import ErrorRecord, FileRecord, PathType, Record

from .filter_engine import FilterEngine
from .permission_action import PermissionAction
from .traversal import Visit, traverse

logger = logging.getLogger(__name__)


class ProjectScanner:
    """Reads every in-scope file of a project into FileRecord or ErrorRecord values.

    Files are read as text with the configured encoding. Content is kept exactly as
    read; escaping for the output format happens later. A file that cannot be read
    (permission denied, invalid encoding, vanished during the scan, ...) yields an
    ErrorRecord carrying a human readable message and the scan goes on with the
    remaining files.

    Attributes:
        root_path (Path): Directory being scanned.
        engine (FilterEngine): Scope decisions shared with the tree renderer.
        permission_action (PermissionAction): How unreadable directories are handled.
        encoding (str): Encoding used to decode file contents.
        file_count (int): Number of files read successfully by the last scan.
        error_count (int): Number of files that failed to read in the last scan.

    Example:
        >>> import tempfile, os
        >>> from ctxl.filter_rules.combiner import FilterRuleSet
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     with open(os.path.join(tmp, "a.py"), "w") as f:
        ...         _ = f.write("print('hi')\\n")
        ...     scanner = ProjectScanner(tmp, FilterEngine(FilterRuleSet.default()))
        ...     scanner.scan()
        [FileRecord(path='a.py', content="print('hi')\\n")]
    """

    def __init__(
        self,
        root_path: PathType,
        engine: FilterEngine,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        encoding: str = "utf-8",
    ) -> None:
        self.root_path = Path(root_path)
        self.engine = engine
        self.permission_action = permission_action
        self.encoding = encoding
        self.file_count = 0
        self.error_count = 0

    def scan(self) -> List[Record]:
        """Read all in-scope files in traversal order.

        Returns:
            One record per in-scope file, directories first then files, by name.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If a directory can't be listed and permission_action is RAISE.
        """
        self.file_count = 0
        self.error_count = 0
        records: List[Record] = []

        def visit(step: Visit) -> None:
            if not step.entry.is_directory:
                records.append(self._read(step.entry.absolute_path, step.entry.relative_path))

        traverse(self.root_path, self.engine, visit, self.permission_action)
        logger.info("Processed %d files with %d errors", self.file_count, self.error_count)
        return records

    def _read(self, path: Path, relative_path: str) -> Record:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self.error_count += 1
            logger.warning("Error processing file %s: %s", relative_path, e)
            return ErrorRecord(path=relative_path, message=_describe_error(e))

        self.file_count += 1
        logger.debug("Including file: %s", relative_path)
        return FileRecord(path=relative_path, content=content)


def _describe_error(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or error.__class__.__name__


def scan(
    root: PathType,
    rules: FilterRuleSet,
    ignore_file: Optional[PathType] = None,
    include_dotfiles: bool = False,
    permission_action: PermissionAction = PermissionAction.IGNORE,
) -> List[Record]:
    """Read the in-scope files below ``root``.

    Args:
        root: Directory to scan.
        rules: Combined include and exclude patterns.
        ignore_file: Ignore file whose patterns are added to the excludes. Defaults to
            ``<root>/.gitignore``; a missing file contributes no patterns.
        include_dotfiles: Whether entries whose names start with a dot may be included.
        permission_action: How unreadable directories are handled.

    Returns:
        FileRecord and ErrorRecord values in traversal order.
    """
    engine = FilterEngine.for_root(root, rules, ignore_file=ignore_file, include_dotfiles=include_dotfiles)
    return ProjectScanner(root, engine, permission_action=permission_action).scan()

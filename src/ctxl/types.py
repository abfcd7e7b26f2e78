from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


@dataclass(frozen=True)
class DirEntry:
    """A directory entry encountered during traversal.

    Attributes:
        absolute_path: Location of the entry on disk.
        relative_path: Path relative to the scan root, always using ``/`` separators.
        is_directory: True if the entry is (or points to) a directory.
        is_dotfile: True if the entry's name starts with a dot.
    """

    absolute_path: Path
    relative_path: str
    is_directory: bool
    is_dotfile: bool

    @property
    def name(self) -> str:
        return self.absolute_path.name


@dataclass(frozen=True)
class FileRecord:
    """Successfully read file: its relative path and raw text content."""

    path: str
    content: str


@dataclass(frozen=True)
class ErrorRecord:
    """File that was selected for output but could not be read."""

    path: str
    message: str


Record = Union[FileRecord, ErrorRecord]

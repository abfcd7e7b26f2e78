"""In-memory project context document."""

from dataclasses import dataclass
from typing import Iterable, Tuple

from ctxl.types import Record


@dataclass(frozen=True)
class Document:
    """Everything that goes into one project context payload.

    Attributes:
        records: File and error records in the order they were produced.
        tree_text: Rendered directory structure.
        task: Caller supplied task description.
    """

    records: Tuple[Record, ...]
    tree_text: str
    task: str


def assemble(records: Iterable[Record], tree_text: str, task: str) -> Document:
    """Combine scan records, the rendered tree and the task into one document.

    Records are kept in the given order without deduplication or validation.

    Example:
        >>> from ctxl.types import ErrorRecord, FileRecord
        >>> doc = assemble([FileRecord("a.py", "x = 1"), ErrorRecord("b.bin", "bad")], "├── a.py\\n", "Explain")
        >>> [r.path for r in doc.records]
        ['a.py', 'b.bin']
    """
    return Document(records=tuple(records), tree_text=tree_text, task=task)

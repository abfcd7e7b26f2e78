"""JSON output strategy for project context documents."""

import json
import re
from typing import Any, Dict

from ctxl.document import Document
from ctxl.types import ErrorRecord, FileRecord, Record

from .base_strategy import OutputStrategy

# File names that are not valid UTF-8 decode to lone surrogates, which UTF-8 cannot encode
_SURROGATES = re.compile("[\ud800-\udfff]")


def _clean(text: str) -> str:
    return _SURROGATES.sub("\ufffd", text)


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that formats a document as a JSON object.

    The object mirrors the XML layout::

        {
          "project_context": {
            "files": [
              {"type": "file", "path": "src/main.py", "content": "..."},
              {"type": "error", "path": "assets/logo.png", "message": "..."}
            ],
            "directory_structure": "├── src\\n..."
          },
          "task": "..."
        }

    Non-ASCII text is written as-is; lone surrogates are replaced by U+FFFD.

    Example:
        >>> strategy = JSONOutputStrategy(indent=None)
        >>> strategy.format_record(FileRecord("a.py", 'print("hi")'))
        {'type': 'file', 'path': 'a.py', 'content': 'print("hi")'}
        >>> strategy.get_file_extension()
        '.json'
    """

    def __init__(self, indent: Any = 2) -> None:
        """Initialize the JSON output strategy.

        Args:
            indent: Indentation passed to json.dumps; None for compact output.
        """
        self.indent = indent

    def format_record(self, record: Record) -> Dict[str, str]:
        if isinstance(record, FileRecord):
            return {"type": "file", "path": _clean(record.path), "content": _clean(record.content)}
        if isinstance(record, ErrorRecord):
            return {"type": "error", "path": _clean(record.path), "message": _clean(record.message)}
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    def format_document(self, document: Document) -> str:
        payload = {
            "project_context": {
                "files": [self.format_record(record) for record in document.records],
                "directory_structure": _clean(document.tree_text),
            },
            "task": _clean(document.task),
        }
        return json.dumps(payload, indent=self.indent, ensure_ascii=False) + "\n"

    def get_file_extension(self) -> str:
        return ".json"

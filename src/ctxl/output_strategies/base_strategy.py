"""Output strategy base class defining the interface for document serialization.

This module provides the abstract base class that defines how a project context
document is turned into text. Concrete strategies exist for XML and JSON.
"""

from abc import ABC, abstractmethod

from ctxl.document import Document


class OutputStrategy(ABC):
    """Abstract base class for project context document serializers.

    Implementations must produce well-formed output for their format: file paths,
    file contents, error messages, the directory tree and the task text are all
    escaped as the format requires, while their values are otherwise kept verbatim.

    Example:
        >>> class PlainStrategy(OutputStrategy):
        ...     def format_document(self, document: Document) -> str:
        ...         return "\\n".join(record.path for record in document.records)
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".txt"
        >>> from ctxl.document import assemble
        >>> from ctxl.types import FileRecord
        >>> PlainStrategy().format_document(assemble([FileRecord("a.py", "")], "", ""))
        'a.py'
    """

    @abstractmethod
    def format_document(self, document: Document) -> str:
        """Serialize a complete document.

        Args:
            document: The document to serialize.

        Returns:
            The serialized document.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".xml", ".json").
        """
        pass

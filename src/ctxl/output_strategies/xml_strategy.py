"""XML output strategy for project context documents.

This module formats a project context document as XML, escaping paths, file
contents, messages and free text so the result is always well-formed.
"""

import re
from xml.sax.saxutils import escape as xml_escape

from ctxl.document import Document
from ctxl.types import ErrorRecord, FileRecord, Record

from .base_strategy import OutputStrategy

# Characters that may not appear anywhere in an XML 1.0 document. Lone surrogates
# come from file names that are not valid UTF-8 and cannot be encoded at all.
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that formats a document as XML.

    The document has the following structure::

        <?xml version="1.0" encoding="UTF-8"?>
        <root>
          <project_context>
            <file path="src/main.py">
              <content>file content...</content>
            </file>
            <error path="assets/logo.png">error message</error>
            <directory_structure>├── src
        ...</directory_structure>
          </project_context>
          <task>task description</task>
        </root>

    Bodies are written verbatim apart from escaping, so no indentation is added inside
    them. Characters that XML 1.0 forbids (most C0 control characters and lone
    surrogates) are replaced by U+FFFD.

    Example:
        >>> strategy = XMLOutputStrategy()
        >>> print(strategy.format_record(FileRecord("a&b.py", "if x < 1: pass")), end='')
            <file path="a&amp;b.py">
              <content>if x &lt; 1: pass</content>
            </file>
        >>> print(strategy.format_record(ErrorRecord("data.bin", "invalid start byte")), end='')
            <error path="data.bin">invalid start byte</error>
    """

    def __init__(self) -> None:
        """Initialize the XML output strategy."""
        # Quotes only need escaping inside attribute values
        self._attribute_entities = {
            '"': "&quot;",
            "'": "&apos;",
        }

    def escape_text(self, text: str) -> str:
        """Escape text for use as element content.

        Example:
            >>> XMLOutputStrategy().escape_text('<a href="x">&</a>')
            '&lt;a href="x"&gt;&amp;&lt;/a&gt;'
        """
        return xml_escape(_ILLEGAL_XML_CHARS.sub("\ufffd", text))

    def escape_attribute(self, value: str) -> str:
        """Escape text for use inside a double-quoted attribute value.

        Example:
            >>> XMLOutputStrategy().escape_attribute('say "hi" & <bye>')
            'say &quot;hi&quot; &amp; &lt;bye&gt;'
        """
        return xml_escape(_ILLEGAL_XML_CHARS.sub("\ufffd", value), self._attribute_entities)

    def format_record(self, record: Record) -> str:
        """Format one file or error record as an XML element with a trailing newline."""
        if isinstance(record, FileRecord):
            return (
                f'    <file path="{self.escape_attribute(record.path)}">\n'
                f"      <content>{self.escape_text(record.content)}</content>\n"
                f"    </file>\n"
            )
        if isinstance(record, ErrorRecord):
            path = self.escape_attribute(record.path)
            return f'    <error path="{path}">{self.escape_text(record.message)}</error>\n'
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    def format_document(self, document: Document) -> str:
        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>\n',
            "<root>\n",
            "  <project_context>\n",
        ]
        parts.extend(self.format_record(record) for record in document.records)
        parts.append(f"    <directory_structure>{self.escape_text(document.tree_text)}</directory_structure>\n")
        parts.append("  </project_context>\n")
        parts.append(f"  <task>{self.escape_text(document.task)}</task>\n")
        parts.append("</root>\n")
        return "".join(parts)

    def get_file_extension(self) -> str:
        """Get the file extension for XML output.

        Example:
            >>> XMLOutputStrategy().get_file_extension()
            '.xml'
        """
        return ".xml"

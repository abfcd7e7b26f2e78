"""Serializers turning a project context document into text."""

from .base_strategy import OutputStrategy
from .json_strategy import JSONOutputStrategy
from .xml_strategy import XMLOutputStrategy

OUTPUT_FORMATS = ("xml", "json")


def get_strategy(output_format: str) -> OutputStrategy:
    """Return the output strategy for a format name ('xml' or 'json').

    Raises:
        ValueError: If the format is not supported.
    """
    output_format = output_format.lower()
    if output_format == "xml":
        return XMLOutputStrategy()
    if output_format == "json":
        return JSONOutputStrategy()
    raise ValueError(f"Unsupported output format: {output_format}. Must be one of: xml, json")


__all__ = ["JSONOutputStrategy", "OUTPUT_FORMATS", "OutputStrategy", "XMLOutputStrategy", "get_strategy"]

"""Command-line interface for ctxl."""

"""Project context bundling utilities.

This package walks a project directory, filters its files with presets,
ignore files and ad-hoc patterns, and bundles their contents together with a
directory tree and a task description into a single document suitable for
use as context in a Large Language Model (LLM) prompt.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("ctxl")
except PackageNotFoundError:
    __version__ = "unknown"

"""Filtered traversal of a project directory.

This package decides which entries of a project are in scope and provides the
two views built on that decision: the file scanner, which reads file contents,
and the tree renderer, which draws the directory structure.
"""

from .filter_engine import FilterEngine
from .permission_action import PermissionAction
from .scanner import ProjectScanner, scan
from .traversal import Visit, traverse
from .tree_renderer import TreeRenderer, render_tree

__all__ = [
    "FilterEngine",
    "PermissionAction",
    "ProjectScanner",
    "TreeRenderer",
    "Visit",
    "render_tree",
    "scan",
    "traverse",
]

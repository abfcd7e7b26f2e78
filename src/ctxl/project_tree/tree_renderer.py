"""ASCII tree rendering of a filtered project directory."""

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional

from anytree import ContStyle, RenderTree

from ctxl.filter_rules.combiner import FilterRuleSet
from ctxl.types import PathType

from .filter_engine import FilterEngine
from .permission_action import PermissionAction
from .traversal import Visit, traverse
from .tree_node import ProjectTreeNode

logger = logging.getLogger(__name__)


class TreeRenderer:
    """Renders the in-scope entries of a project as a ``tree``-style listing.

    The renderer walks the project through the same traversal and FilterEngine as
    the file scanner, so a file appears in the tree exactly when its content is
    emitted. Directories are always listed when they are not excluded, even if no
    file below them matches the include patterns.

    Output has one line per entry and no line for the root itself::

        ├── src
        │   ├── utils
        │   │   └── helpers.py
        │   └── main.py
        └── README.md

    Attributes:
        root_path (Path): Directory being rendered.
        engine (FilterEngine): Scope decisions shared with the file scanner.
        permission_action (PermissionAction): How unreadable directories are handled.
        directory_count (int): Directories in the last rendered tree.
        file_count (int): Files in the last rendered tree.
    """

    def __init__(
        self,
        root_path: PathType,
        engine: FilterEngine,
        permission_action: PermissionAction = PermissionAction.IGNORE,
    ) -> None:
        self.root_path = Path(root_path)
        self.engine = engine
        self.permission_action = permission_action
        self.directory_count = 0
        self.file_count = 0

    def build_tree(self) -> ProjectTreeNode:
        """Build a node hierarchy of the in-scope entries.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If a directory can't be listed and permission_action is RAISE.
        """
        root = ProjectTreeNode(self.root_path.name, is_dir=True)
        nodes: Dict[str, ProjectTreeNode] = {"": root}
        self.directory_count = 0
        self.file_count = 0

        def visit(step: Visit) -> None:
            entry = step.entry
            parent_path = entry.relative_path.rpartition("/")[0]
            node = ProjectTreeNode(
                entry.name,
                parent=nodes[parent_path],
                relative_path=entry.relative_path,
                is_dir=entry.is_directory,
            )
            if entry.is_directory:
                nodes[entry.relative_path] = node
                self.directory_count += 1
            else:
                self.file_count += 1

        traverse(self.root_path, self.engine, visit, self.permission_action)
        return root

    def stream_lines(self) -> Iterator[str]:
        """Generate the tree listing one line at a time, each with a trailing newline."""
        root = self.build_tree()
        for pre, _, node in RenderTree(root, style=ContStyle()):
            if node is root:
                continue
            yield f"{pre}{node.name}\n"

    def render(self) -> str:
        """Render the complete tree listing. An empty project renders as an empty string."""
        tree_text = "".join(self.stream_lines())
        logger.debug("Rendered tree with %d directories and %d files", self.directory_count, self.file_count)
        return tree_text


def render_tree(
    root: PathType,
    rules: FilterRuleSet,
    ignore_file: Optional[PathType] = None,
    include_dotfiles: bool = False,
    permission_action: PermissionAction = PermissionAction.IGNORE,
) -> str:
    """Render the in-scope entries below ``root`` as an ASCII tree.

    Takes the same arguments as ctxl.project_tree.scanner.scan() and applies the same
    filtering, so the tree and the scanned files always agree.

    Example:
        >>> import tempfile, os
        >>> from ctxl.filter_rules.combiner import FilterRuleSet
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     os.makedirs(os.path.join(tmp, "y"))
        ...     for name in ("x", "w", "y/z"):
        ...         open(os.path.join(tmp, name), "w").close()
        ...     print(render_tree(tmp, FilterRuleSet.default()), end="")
        ├── y
        │   └── z
        ├── w
        └── x
    """
    engine = FilterEngine.for_root(root, rules, ignore_file=ignore_file, include_dotfiles=include_dotfiles)
    return TreeRenderer(root, engine, permission_action=permission_action).render()

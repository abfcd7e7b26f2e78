"""Node representation for entries of a rendered project tree."""

from typing import Any, Optional

from anytree import Node


class ProjectTreeNode(Node):  # type: ignore
    """Node class representing a file or directory in the rendered project tree.

    Extends anytree.Node with the entry's relative path and a directory flag.
    Children keep the order in which they were attached, which is the traversal order.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        relative_path (str): Path relative to the project root ("" for the root).
        is_dir (bool): True if this node represents a directory.

    Example:
        >>> root = ProjectTreeNode("", is_dir=True)
        >>> child = ProjectTreeNode("app.py", parent=root, relative_path="app.py")
        >>> [node.name for node in root.children]
        ['app.py']
        >>> child.is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["ProjectTreeNode"] = None,
        relative_path: str = "",
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.relative_path = relative_path
        self.is_dir = is_dir

"""Fold a flat list of scored files into a directory tree.

The tree is a tagged union of two frozen node types. Directories carry
children; files carry their commit data and, once decorated, a color.
Every node's ``value`` is a commit count: a file's own total, or the sum
of a directory's children.

Structure::

    DirectoryNode(name="root", path="", value=18, children=(
        DirectoryNode(name="src", path="src", value=15, children=(
            FileNode(name="App.tsx", path="src/App.tsx", value=10, ...),
            FileNode(name="utils.ts", path="src/utils.ts", value=5, ...),
        )),
        FileNode(name="README.md", path="README.md", value=3, ...),
    ))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union

from ..temporal.models import FileCommitData

ROOT_NAME = "root"


@dataclass(frozen=True)
class FileNode:
    name: str
    path: str
    value: int
    file_data: FileCommitData
    color: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return True


@dataclass(frozen=True)
class DirectoryNode:
    name: str
    path: str
    value: int = 0
    children: tuple[TreeNode, ...] = field(default_factory=tuple)

    @property
    def is_file(self) -> bool:
        return False


TreeNode = Union[DirectoryNode, FileNode]


class _DirBuilder:
    """Mutable scratch directory used only while the tree is assembled."""

    __slots__ = ("name", "path", "children")

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        self.children: list[Union[_DirBuilder, FileCommitData]] = []


def build_tree(files: Iterable[FileCommitData]) -> DirectoryNode:
    """Build the directory tree for *files*.

    Directories are looked up by their full path, so ``a/lib`` and
    ``b/lib`` stay distinct. Children keep the order in which their paths
    were first seen.
    """
    root = _DirBuilder(ROOT_NAME, "")
    dirs: dict[str, _DirBuilder] = {}

    for file_data in files:
        parts = file_data.file_path.split("/")
        parent = root
        current_path = ""
        for part in parts[:-1]:
            current_path = f"{current_path}/{part}" if current_path else part
            node = dirs.get(current_path)
            if node is None:
                node = _DirBuilder(part, current_path)
                dirs[current_path] = node
                parent.children.append(node)
            parent = node
        parent.children.append(file_data)

    return _freeze(root)


def _freeze(builder: _DirBuilder) -> DirectoryNode:
    # Post-order: children first so their values can be summed.
    children: list[TreeNode] = []
    for child in builder.children:
        if isinstance(child, _DirBuilder):
            children.append(_freeze(child))
        else:
            children.append(
                FileNode(
                    name=child.file_path.rsplit("/", 1)[-1],
                    path=child.file_path,
                    value=child.total_commit_count,
                    file_data=child,
                )
            )
    return DirectoryNode(
        name=builder.name,
        path=builder.path,
        value=sum(c.value for c in children),
        children=tuple(children),
    )


def iter_files(node: TreeNode) -> Iterator[FileNode]:
    """Yield every file node under *node*, depth-first in tree order."""
    if isinstance(node, FileNode):
        yield node
        return
    for child in node.children:
        yield from iter_files(child)


def find_node(root: DirectoryNode, path: str) -> Optional[TreeNode]:
    """Return the node at *path* (``''`` is the root), or None."""
    if not path:
        return root
    node: TreeNode = root
    for part in path.split("/"):
        if not isinstance(node, DirectoryNode):
            return None
        node = next((c for c in node.children if c.name == part), None)
        if node is None:
            return None
    return node

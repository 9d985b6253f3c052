"""Arena-backed tree mirroring the vault's folder hierarchy."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class ItemKind(str, Enum):
    """What a tree node stands for."""

    ROOT = "root"
    FOLDER = "folder"
    FILE = "file"
    NOTE = "note"


@dataclass
class TreeNode:
    """A node in the vault tree. ``index`` is its position in the arena."""

    name: str
    index: int
    kind: ItemKind
    depth: int
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "index": self.index,
            "kind": self.kind.value,
            "depth": self.depth,
            "parent": self.parent,
            "children": self.children,
        }


class VaultTree:
    """Append-only list of nodes addressed by integer index.

    Indices are never reused or invalidated; the tree is rebuilt rather
    than edited.
    """

    ROOT = 0

    def __init__(self, root_name: str = "") -> None:
        self.nodes: list[TreeNode] = [TreeNode(name=root_name, index=0, kind=ItemKind.ROOT, depth=0)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> TreeNode:
        return self.nodes[index]

    @property
    def root(self) -> TreeNode:
        return self.nodes[self.ROOT]

    def add(self, name: str, kind: ItemKind, parent: int = ROOT) -> int:
        """Append a node under ``parent`` and return its index."""
        parent_node = self.nodes[parent]
        index = len(self.nodes)
        self.nodes.append(
            TreeNode(
                name=name,
                index=index,
                kind=kind,
                depth=parent_node.depth + 1,
                parent=parent,
            )
        )
        parent_node.children.append(index)
        return index

    def children(self, index: int = ROOT) -> list[TreeNode]:
        return [self.nodes[i] for i in self.nodes[index].children]

    def flatten(self, index: int = ROOT) -> list[TreeNode]:
        """Pre-order listing of the subtree rooted at ``index``."""
        out: list[TreeNode] = []
        stack = [index]
        while stack:
            node = self.nodes[stack.pop()]
            out.append(node)
            stack.extend(reversed(node.children))
        return out

    def path_of(self, index: int) -> list[str]:
        """Names from the first level below the root down to ``index``."""
        names: list[str] = []
        node = self.nodes[index]
        while node.parent is not None:
            names.append(node.name)
            node = self.nodes[node.parent]
        return list(reversed(names))

    def render(self, index: int = ROOT) -> str:
        """Indented text outline of a subtree, folders suffixed with '/'."""
        base = self.nodes[index].depth
        lines = []
        for node in self.flatten(index):
            suffix = "/" if node.kind in (ItemKind.ROOT, ItemKind.FOLDER) else ""
            lines.append(f"{'  ' * (node.depth - base)}{node.name}{suffix}")
        return "\n".join(lines)

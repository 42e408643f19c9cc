"""
Node storage for the Red-Black Tree.

Nodes live in a flat arena and refer to each other by index, so the
parent back-reference never forms an ownership cycle.
"""

from dataclasses import dataclass
from enum import IntEnum

from rbindex.models.exceptions import TreeInvariantError

NIL = -1


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


@dataclass
class Node:
    """Node in the Red-Black Tree."""

    value: int
    color: Color = Color.RED
    parent: int = NIL
    left: int = NIL
    right: int = NIL

    def is_leaf(self) -> bool:
        return self.left == NIL and self.right == NIL


class NodeArena:
    """
    Owns every node of a tree.

    Slots of released nodes are reused by later allocations. Indexing with
    NIL or with a released slot is treated as an invariant violation.
    """

    def __init__(self) -> None:
        self._slots: list[Node | None] = []
        self._free: list[int] = []
        self._live: int = 0

    def allocate(self, value: int, parent: int = NIL) -> int:
        """
        Create a new RED leaf.

        Args:
            value: Key stored in the node.
            parent: Index of the parent node, NIL for a root.

        Returns:
            Index of the new node.
        """
        node = Node(value=value, parent=parent)
        if self._free:
            index = self._free.pop()
            self._slots[index] = node
        else:
            index = len(self._slots)
            self._slots.append(node)
        self._live += 1
        return index

    def release(self, index: int) -> None:
        """Drop the node at index and make its slot available again."""
        self[index]  # raises for NIL or an already released slot
        self._slots[index] = None
        self._free.append(index)
        self._live -= 1

    def color_of(self, index: int) -> Color:
        """Color of the node at index; a missing child counts as BLACK."""
        if index == NIL:
            return Color.BLACK
        return self[index].color

    def is_red(self, index: int) -> bool:
        return self.color_of(index) == Color.RED

    def is_black(self, index: int) -> bool:
        return self.color_of(index) == Color.BLACK

    def clear(self) -> None:
        self._slots.clear()
        self._free.clear()
        self._live = 0

    def __getitem__(self, index: int) -> Node:
        if index == NIL:
            raise TreeInvariantError("dereferenced NIL node index")
        node = self._slots[index] if 0 <= index < len(self._slots) else None
        if node is None:
            raise TreeInvariantError(f"node index {index} is not allocated")
        return node

    def __len__(self) -> int:
        return self._live


class NodeView:
    """
    Read-only projection of a tree node.

    Handed out to collaborators such as renderers so they can walk the
    tree without touching the arena.
    """

    __slots__ = ("_arena", "_index")

    def __init__(self, arena: NodeArena, index: int) -> None:
        self._arena = arena
        self._index = index

    @property
    def value(self) -> int:
        return self._arena[self._index].value

    @property
    def color(self) -> Color:
        return self._arena[self._index].color

    @property
    def left(self) -> "NodeView | None":
        return self._child(self._arena[self._index].left)

    @property
    def right(self) -> "NodeView | None":
        return self._child(self._arena[self._index].right)

    def _child(self, index: int) -> "NodeView | None":
        if index == NIL:
            return None
        return NodeView(self._arena, index)

    def __repr__(self) -> str:
        return f"NodeView(value={self.value}, color={self.color.name})"

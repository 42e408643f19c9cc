"""
Red-Black Tree implementation of an ordered index of unique integer keys.

Nodes are kept in a NodeArena and refer to each other by index. Both
rebalancing passes are iterative, so stack depth stays constant.
"""

import logging
from collections.abc import Iterator

from rbindex.interfaces.ordered_index import OrderedIndex
from rbindex.models.exceptions import (
    InvariantViolation,
    RotationError,
    TreeInvariantError,
)
from rbindex.models.node import NIL, Color, NodeArena, NodeView

logger = logging.getLogger(__name__)


class RedBlackTree(OrderedIndex):
    """
    Red-Black Tree implementation of OrderedIndex.

    Properties maintained:
    1. Every node is either red or black
    2. Root is always black
    3. Red nodes cannot have red children
    4. Every path from a node to a missing child has the same number of black nodes
    5. Keys are unique and in-order traversal is strictly increasing
    """

    def __init__(self) -> None:
        self._nodes = NodeArena()
        self._root: int = NIL

    def insert(self, value: int) -> None:
        """Insert a key, ignoring duplicates. O(log N)"""
        nodes = self._nodes
        if self._root == NIL:
            self._root = nodes.allocate(value)
            nodes[self._root].color = Color.BLACK
            return

        # Find insertion point
        parent = NIL
        current = self._root

        while current != NIL:
            parent = current
            node = nodes[current]
            if value < node.value:
                current = node.left
            elif value > node.value:
                current = node.right
            else:
                logger.warning(f"value {value} has been inserted, ignoring duplicate")
                return

        # Attach new red leaf
        new_node = nodes.allocate(value, parent)
        if value < nodes[parent].value:
            nodes[parent].left = new_node
        else:
            nodes[parent].right = new_node

        self._fix_insert(new_node)

    def delete(self, value: int) -> bool:
        """Remove a key. O(log N)"""
        node = self._find_node(value)
        if node == NIL:
            return False

        removed = self._removal_point(node)
        self._fix_delete(removed)
        self._splice(removed)
        return True

    def has(self, value: int) -> bool:
        return self._find_node(value) != NIL

    def size(self) -> int:
        return len(self._nodes)

    def is_empty(self) -> bool:
        return self._root == NIL

    def clear(self) -> None:
        self._nodes.clear()
        self._root = NIL

    def min(self) -> int | None:
        """Smallest key, or None when empty."""
        if self._root == NIL:
            return None
        return self._nodes[self._leftmost(self._root)].value

    def max(self) -> int | None:
        """Largest key, or None when empty."""
        if self._root == NIL:
            return None
        index = self._root
        while self._nodes[index].right != NIL:
            index = self._nodes[index].right
        return self._nodes[index].value

    @property
    def root(self) -> NodeView | None:
        """Read-only view of the root node."""
        if self._root == NIL:
            return None
        return NodeView(self._nodes, self._root)

    def __iter__(self) -> Iterator[int]:
        return self.iterator()

    def iterator(self, start: int | None = None, end: int | None = None) -> Iterator[int]:
        return _RangeIterator(self._nodes, self._root, start, end)

    def black_height(self) -> int:
        """Number of black nodes on the path from the root to its leftmost nil."""
        height = 0
        index = self._root
        while index != NIL:
            if self._nodes.is_black(index):
                height += 1
            index = self._nodes[index].left
        return height

    def validate(self) -> int:
        """
        Check every red-black property over the whole tree.

        Returns:
            The black height of the tree.

        Raises:
            InvariantViolation: naming the first property found broken.
        """
        nodes = self._nodes
        if self._root == NIL:
            if len(nodes) != 0:
                raise InvariantViolation("size", f"empty tree owns {len(nodes)} nodes")
            return 0

        root = nodes[self._root]
        if root.parent != NIL:
            raise InvariantViolation("links", f"root {root.value} has a parent")
        if root.color != Color.BLACK:
            raise InvariantViolation("root-black", f"root {root.value} is not black")

        height, count = self._check_subtree(self._root, None, None)
        if count != len(nodes):
            raise InvariantViolation(
                "size", f"{count} nodes reachable but {len(nodes)} allocated"
            )
        return height

    def _check_subtree(
        self, index: int, low: int | None, high: int | None
    ) -> tuple[int, int]:
        """Return (black height, node count) of the subtree at index."""
        if index == NIL:
            return 0, 0

        nodes = self._nodes
        node = nodes[index]
        if not isinstance(node.color, Color):
            raise InvariantViolation("color", f"node {node.value} has color {node.color!r}")
        if (low is not None and node.value <= low) or (high is not None and node.value >= high):
            raise InvariantViolation(
                "order", f"node {node.value} outside ({low}, {high})"
            )
        if node.color == Color.RED and (nodes.is_red(node.left) or nodes.is_red(node.right)):
            raise InvariantViolation("red-red", f"red node {node.value} has a red child")

        for child in (node.left, node.right):
            if child != NIL and nodes[child].parent != index:
                raise InvariantViolation(
                    "links", f"child {nodes[child].value} does not point back to {node.value}"
                )

        left_height, left_count = self._check_subtree(node.left, low, node.value)
        right_height, right_count = self._check_subtree(node.right, node.value, high)
        if left_height != right_height:
            raise InvariantViolation(
                "black-height",
                f"node {node.value} has black heights {left_height} and {right_height}",
            )

        height = left_height + (1 if node.color == Color.BLACK else 0)
        return height, left_count + right_count + 1

    def _find_node(self, value: int) -> int:
        """Find node index by key, NIL if absent."""
        current = self._root
        while current != NIL:
            node = self._nodes[current]
            if value < node.value:
                current = node.left
            elif value > node.value:
                current = node.right
            else:
                return current
        return NIL

    def _leftmost(self, index: int) -> int:
        while self._nodes[index].left != NIL:
            index = self._nodes[index].left
        return index

    def _fix_insert(self, node: int) -> None:
        """Fix Red-Black Tree properties after insert."""
        nodes = self._nodes

        while nodes.is_red(nodes[node].parent):
            parent = nodes[node].parent
            grandparent = nodes[parent].parent
            if grandparent == NIL:
                raise TreeInvariantError(f"red node {nodes[parent].value} is the root")

            if parent == nodes[grandparent].left:
                uncle = nodes[grandparent].right

                if nodes.is_red(uncle):
                    # Uncle is red: push black down from the grandparent
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    node = grandparent
                elif node == nodes[parent].right:
                    # LR: turn into LL, continue from the former parent
                    self._rotate_left(parent)
                    node = parent
                else:
                    # LL
                    nodes[parent].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    self._rotate_right(grandparent)
            else:
                uncle = nodes[grandparent].left

                if nodes.is_red(uncle):
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    node = grandparent
                elif node == nodes[parent].left:
                    # RL
                    self._rotate_right(parent)
                    node = parent
                else:
                    # RR
                    nodes[parent].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    self._rotate_left(grandparent)

        nodes[self._root].color = Color.BLACK

    def _rotate_left(self, index: int) -> None:
        """Left rotation."""
        nodes = self._nodes
        node = nodes[index]
        right_index = node.right
        if right_index == NIL:
            raise RotationError("left", node.value)

        right_child = nodes[right_index]
        node.right = right_child.left
        if right_child.left != NIL:
            nodes[right_child.left].parent = index

        right_child.parent = node.parent
        self._replace_child(node.parent, index, right_index)

        right_child.left = index
        node.parent = right_index
        logger.debug(f"left rotate at {node.value}")

    def _rotate_right(self, index: int) -> None:
        """Right rotation."""
        nodes = self._nodes
        node = nodes[index]
        left_index = node.left
        if left_index == NIL:
            raise RotationError("right", node.value)

        left_child = nodes[left_index]
        node.left = left_child.right
        if left_child.right != NIL:
            nodes[left_child.right].parent = index

        left_child.parent = node.parent
        self._replace_child(node.parent, index, left_index)

        left_child.right = index
        node.parent = left_index
        logger.debug(f"right rotate at {node.value}")

    def _replace_child(self, parent: int, old: int, new: int) -> None:
        """Point parent's slot holding old (or the root) at new."""
        if parent == NIL:
            self._root = new
        elif self._nodes[parent].left == old:
            self._nodes[parent].left = new
        else:
            self._nodes[parent].right = new

    def _removal_point(self, index: int) -> int:
        """
        Pick the leaf to physically detach when deleting the key at index.

        A node with two children takes its in-order successor's key, a node
        with one child takes that child's key, and the search continues at the
        node whose key was taken until a leaf is reached.
        """
        nodes = self._nodes
        node = nodes[index]

        while not node.is_leaf():
            if node.left != NIL and node.right != NIL:
                source = self._leftmost(node.right)
            else:
                source = node.left if node.left != NIL else node.right

            node.value = nodes[source].value
            index, node = source, nodes[source]

        return index

    def _fix_delete(self, node: int) -> None:
        """Fix Red-Black Tree properties before node is detached."""
        nodes = self._nodes

        while node != self._root and nodes.is_black(node):
            parent = nodes[node].parent

            if node == nodes[parent].left:
                sibling = self._sibling(parent, nodes[parent].right, node)

                if nodes.is_red(sibling):
                    nodes[sibling].color = Color.BLACK
                    nodes[parent].color = Color.RED
                    self._rotate_left(parent)
                    sibling = self._sibling(parent, nodes[parent].right, node)

                if nodes.is_black(nodes[sibling].left) and nodes.is_black(nodes[sibling].right):
                    # Both nephews black: the parent's subtree loses one black level
                    nodes[sibling].color = Color.RED
                    node = parent
                    continue

                if nodes.is_black(nodes[sibling].right):
                    # Near nephew red: rotate it into the far position
                    nodes[nodes[sibling].left].color = Color.BLACK
                    nodes[sibling].color = Color.RED
                    self._rotate_right(sibling)
                    sibling = self._sibling(parent, nodes[parent].right, node)

                # Far nephew red
                nodes[sibling].color = nodes[parent].color
                nodes[parent].color = Color.BLACK
                nodes[nodes[sibling].right].color = Color.BLACK
                self._rotate_left(parent)
                break
            else:
                sibling = self._sibling(parent, nodes[parent].left, node)

                if nodes.is_red(sibling):
                    nodes[sibling].color = Color.BLACK
                    nodes[parent].color = Color.RED
                    self._rotate_right(parent)
                    sibling = self._sibling(parent, nodes[parent].left, node)

                if nodes.is_black(nodes[sibling].left) and nodes.is_black(nodes[sibling].right):
                    nodes[sibling].color = Color.RED
                    node = parent
                    continue

                if nodes.is_black(nodes[sibling].left):
                    nodes[nodes[sibling].right].color = Color.BLACK
                    nodes[sibling].color = Color.RED
                    self._rotate_left(sibling)
                    sibling = self._sibling(parent, nodes[parent].left, node)

                nodes[sibling].color = nodes[parent].color
                nodes[parent].color = Color.BLACK
                nodes[nodes[sibling].left].color = Color.BLACK
                self._rotate_right(parent)
                break

        nodes[node].color = Color.BLACK

    def _sibling(self, parent: int, sibling: int, node: int) -> int:
        """Return sibling, which a black non-root node always has."""
        if sibling == NIL:
            raise TreeInvariantError(
                f"black node {self._nodes[node].value} under "
                f"{self._nodes[parent].value} has no sibling"
            )
        return sibling

    def _splice(self, index: int) -> None:
        """Detach node, lifting its only child (if any) into its place."""
        nodes = self._nodes
        node = nodes[index]
        child = node.left if node.left != NIL else node.right

        if child != NIL:
            nodes[child].parent = node.parent
        self._replace_child(node.parent, index, child)
        nodes.release(index)


class _RangeIterator(Iterator[int]):
    """Iterator for range queries on Red-Black Tree."""

    def __init__(self, nodes: NodeArena, root: int, start: int | None, end: int | None) -> None:
        self._nodes = nodes
        self._stack: list[int] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        if not self._stack:
            raise StopIteration

        node = self._nodes[self._stack.pop()]

        # Check end bound
        if self._end is not None and node.value >= self._end:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.value

    def _push_left_path(self, index: int, start: int | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while index != NIL:
            node = self._nodes[index]
            if start is not None and node.value < start:
                # Skip nodes less than start
                index = node.right
            else:
                self._stack.append(index)
                index = node.left

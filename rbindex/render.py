"""
Level-order rendering of a tree for diagnostics.
"""

from rbindex.models.node import Color, NodeView
from rbindex.models.sortedcontainers import RedBlackTree


def level_order(tree: RedBlackTree) -> list[list[tuple[int, Color]]]:
    """
    Collect (value, color) pairs level by level, left to right.

    Missing children are skipped, so a level only lists nodes that exist.
    """
    levels: list[list[tuple[int, Color]]] = []
    current: list[NodeView] = [tree.root] if tree.root is not None else []

    while current:
        levels.append([(node.value, node.color) for node in current])
        children: list[NodeView] = []
        for node in current:
            if node.left is not None:
                children.append(node.left)
            if node.right is not None:
                children.append(node.right)
        current = children

    return levels


def format_levels(tree: RedBlackTree) -> str:
    """One line per level, entries written as value:COLOR separated by tabs."""
    return "\n".join(
        "\t".join(f"{value}:{color.name}" for value, color in level)
        for level in level_order(tree)
    )

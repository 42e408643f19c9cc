"""
Data models for the ordered index.
"""

from rbindex.models.exceptions import InvariantViolation, RotationError, TreeInvariantError
from rbindex.models.node import NIL, Color, Node, NodeArena, NodeView

__all__ = [
    "NIL",
    "Color",
    "Node",
    "NodeArena",
    "NodeView",
    "TreeInvariantError",
    "RotationError",
    "InvariantViolation",
]

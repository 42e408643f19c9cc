"""
In-process ordered index backed by a red-black tree.

This package provides a set of unique integer keys with:
- insert(value) - O(log N), duplicates ignored
- delete(value) - O(log N), returns whether the key was present
- has(value) - O(log N) membership
- iterator(start, end) - ascending range iteration
- validate() - exhaustive red-black invariant check
"""

from rbindex.models.exceptions import InvariantViolation, RotationError, TreeInvariantError
from rbindex.models.node import Color
from rbindex.models.sortedcontainers import RedBlackTree

__all__ = [
    "RedBlackTree",
    "Color",
    "TreeInvariantError",
    "RotationError",
    "InvariantViolation",
]

"""
Ordered index implementations.
"""

from rbindex.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["RedBlackTree"]

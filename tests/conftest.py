"""
Shared pytest fixtures for ordered index tests.
"""

import pytest

from rbindex.models.sortedcontainers import RedBlackTree


@pytest.fixture
def tree():
    """Provide a fresh empty RedBlackTree."""
    return RedBlackTree()


@pytest.fixture
def sample_values():
    """Provide the insertion sequence used by the command-line driver."""
    return [10, 5, 20, 1, 2, 7, 15, 30]


@pytest.fixture
def populated_tree(sample_values):
    """Provide a tree holding sample_values."""
    tree = RedBlackTree()
    for value in sample_values:
        tree.insert(value)
    return tree


@pytest.fixture
def large_sample_values():
    """Provide a larger shuffled sample for stress testing."""
    return [(i * 7919) % 1000 for i in range(1000)]

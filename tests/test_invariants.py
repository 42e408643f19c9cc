"""
Exhaustive and randomized checks that every operation preserves the red-black properties.
"""

import itertools
import random

import pytest

from rbindex.models.sortedcontainers import RedBlackTree
from rbindex.render import level_order


class TestExhaustive:
    """Every permutation of a small key set."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
    def test_every_insert_prefix_is_valid(self, n):
        for order in itertools.permutations(range(n)):
            tree = RedBlackTree()
            for i, value in enumerate(order):
                tree.insert(value)
                tree.validate()
                assert tree.size() == i + 1
            assert list(tree) == list(range(n))

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
    def test_round_trip_empties_tree(self, n):
        """Test insert then delete all, in insertion, reverse and sorted order."""
        for order in itertools.permutations(range(n)):
            for removal in (order, order[::-1], sorted(order)):
                tree = RedBlackTree()
                for value in order:
                    tree.insert(value)

                remaining = set(order)
                for value in removal:
                    assert tree.delete(value)
                    remaining.discard(value)
                    tree.validate()
                    assert list(tree) == sorted(remaining)

                assert tree.is_empty()
                assert tree.root is None

    def test_every_delete_order(self):
        """Test all deletion orders from a fixed tree of 6 keys."""
        values = [3, 1, 5, 0, 2, 4]
        for removal in itertools.permutations(values):
            tree = RedBlackTree()
            for value in values:
                tree.insert(value)
            for value in removal:
                assert tree.delete(value)
                tree.validate()
            assert tree.is_empty()


class TestRandomized:
    """Seeded random workloads."""

    @pytest.mark.parametrize("seed", range(5))
    def test_mixed_workload_matches_set(self, seed):
        """Test in-order traversal tracks a reference set under random inserts/deletes."""
        rng = random.Random(seed)
        tree = RedBlackTree()
        reference: set[int] = set()

        for _ in range(2000):
            value = rng.randint(0, 200)
            if rng.random() < 0.6:
                tree.insert(value)
                reference.add(value)
            else:
                assert tree.delete(value) == (value in reference)
                reference.discard(value)

            assert tree.size() == len(reference)

        tree.validate()
        assert list(tree) == sorted(reference)

    @pytest.mark.parametrize("seed", range(3))
    def test_black_height_changes_by_at_most_one(self, seed):
        rng = random.Random(seed)
        tree = RedBlackTree()
        values = rng.sample(range(10000), 500)

        for value in values:
            before = tree.black_height()
            tree.insert(value)
            after = tree.validate()
            assert after == tree.black_height()
            assert after - before in (0, 1)

        rng.shuffle(values)
        for value in values:
            before = tree.black_height()
            tree.delete(value)
            after = tree.validate()
            assert before - after in (0, 1)

        assert tree.black_height() == 0

    def test_absent_delete_keeps_structure(self, large_sample_values):
        tree = RedBlackTree()
        for value in large_sample_values[::2]:
            tree.insert(value)
        before = level_order(tree)

        for value in large_sample_values[1::2]:
            assert not tree.delete(value)

        assert level_order(tree) == before
        tree.validate()

    def test_duplicates_keep_structure(self, large_sample_values):
        tree = RedBlackTree()
        for value in large_sample_values:
            tree.insert(value)
        before = level_order(tree)

        for value in large_sample_values[:100]:
            tree.insert(value)

        assert level_order(tree) == before
        assert tree.size() == len(large_sample_values)

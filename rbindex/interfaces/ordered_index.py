"""
OrderedIndex abstract base class for sets of unique ordered keys.
"""

from abc import abstractmethod

from rbindex.interfaces.range_iterable import RangeIterable


class OrderedIndex(RangeIterable):
    """
    Abstract base class for ordered indexes of unique keys.

    Provides O(log N) operations for insert, delete and membership.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - RedBlackTree
    """

    @abstractmethod
    def insert(self, value: int) -> None:
        """
        Insert a key.

        Inserting a key that is already present leaves the index unchanged.

        Args:
            value: The key to insert.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, value: int) -> bool:
        """
        Remove a key.

        Args:
            value: The key to remove.

        Returns:
            True if the key was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, value: int) -> bool:
        """
        Check if a key exists.

        Args:
            value: The key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of keys.

        Time complexity: O(1)
        """
        pass

    def __contains__(self, value: object) -> bool:
        return self.has(value)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.size()

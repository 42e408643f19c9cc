"""
Abstract base classes and protocols for the ordered index.
"""

from rbindex.interfaces.ordered_index import OrderedIndex
from rbindex.interfaces.range_iterable import RangeIterable

__all__ = ["OrderedIndex", "RangeIterable"]

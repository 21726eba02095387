"""
Oracle for presence-sort correctness.

Python's built-in `sorted()` is the ground truth. For distinct inputs the
presence sort must match it exactly; for inputs with duplicates the presence
sort folds equal values together, so the matching oracle is the sorted set.

Public API (stable):
    oracle_sort(a: list[int]) -> list[int]
    oracle_sort_distinct(a: list[int]) -> list[int]
    equals_oracle(a: list[int], out: list[int]) -> bool
"""

from __future__ import annotations

from typing import List

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "oracle_sort_distinct", "equals_oracle"]


def oracle_sort(a: List[int]) -> List[int]:
    """Return a new list with the elements of `a` in nondecreasing order."""
    return sorted(a)


def oracle_sort_distinct(a: List[int]) -> List[int]:
    """Return the distinct values of `a` in increasing order (what a collapsing sort yields)."""
    return sorted(set(a))


def equals_oracle(a: List[int], out: List[int]) -> bool:
    """True iff `out` is exactly `oracle_sort(a)`."""
    return out == oracle_sort(a)

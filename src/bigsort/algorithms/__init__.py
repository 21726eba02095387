"""
Sorting algorithms.

Each module exposes `sort(a: list[int], *, config: dict | None = None) -> list[int]`
so the benchmark runner can load it by name (`bigsort.algorithms.<name>`).
The presence sort additionally exposes its engine and SortResult; its
convenience function lives on the submodule and on `bigsort`.
"""

from .presence_sort import (
    PresenceSortEngine,
    SortResult,
    index_to_value,
    value_to_index,
)

__all__ = [
    "PresenceSortEngine",
    "SortResult",
    "index_to_value",
    "value_to_index",
]

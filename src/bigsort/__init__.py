"""
bigsort: linear-time sorting of distinct positive integers with a presence vector.

    from bigsort import PresenceSortEngine, generate_distinct
    import numpy as np

    a = generate_distinct(10, 1, 100, np.random.default_rng(0))
    result = PresenceSortEngine().sort(a)
    result.values, result.presence_vector_size, result.elapsed_ms
"""

from .algorithms.presence_sort import (
    PresenceSortEngine,
    SortResult,
    index_to_value,
    presence_sort,
    value_to_index,
)
from .datasets import generate_distinct, make_dataset
from .errors import (
    BigSortError,
    DuplicateValueError,
    EmptyInputError,
    NonIntegerValueError,
    NonPositiveValueError,
    RangeTooSmallError,
)

__version__ = "0.1.0"

__all__ = [
    "PresenceSortEngine",
    "SortResult",
    "presence_sort",
    "value_to_index",
    "index_to_value",
    "generate_distinct",
    "make_dataset",
    "BigSortError",
    "EmptyInputError",
    "NonPositiveValueError",
    "NonIntegerValueError",
    "DuplicateValueError",
    "RangeTooSmallError",
]

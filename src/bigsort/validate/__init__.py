"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        oracle_sort_distinct
        equals_oracle

    - Property checks:
        is_strictly_increasing
        first_increasing_violation_index
        is_set_equal
        set_difference
        find_duplicates
        assert_no_mutation
        check_sort_result
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_sort, oracle_sort_distinct
from .properties import (
    assert_no_mutation,
    check_sort_result,
    find_duplicates,
    first_increasing_violation_index,
    is_set_equal,
    is_strictly_increasing,
    set_difference,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "oracle_sort_distinct",
    "equals_oracle",
    "is_strictly_increasing",
    "first_increasing_violation_index",
    "is_set_equal",
    "set_difference",
    "find_duplicates",
    "assert_no_mutation",
    "check_sort_result",
]

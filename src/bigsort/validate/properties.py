"""
Property helpers for validating presence-sort results.

These functions provide lightweight checks you can use in tests and inside
the benchmark runner for sanity validation.

Public API (stable):
    is_strictly_increasing(xs: Sequence[int]) -> bool
    first_increasing_violation_index(xs: Sequence[int]) -> int | None
    is_set_equal(a: Sequence[int], b: Sequence[int]) -> bool
    set_difference(a: Sequence[int], b: Sequence[int]) -> dict[str, list[int]]
    find_duplicates(xs: Sequence[int]) -> dict[int, int]
    assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None
    check_sort_result(a: Sequence[int], result: SortResult) -> list[str]

Notes
-----
- The presence sort only accepts distinct values, so its output must be
  *strictly* increasing and must contain exactly the input set.
- A result shorter than its input is how duplicate input shows up when the
  engine is not in strict mode; `check_sort_result` reports it as a problem.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Dict, List, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from bigsort.algorithms.presence_sort import SortResult


__all__ = [
    "is_strictly_increasing",
    "first_increasing_violation_index",
    "is_set_equal",
    "set_difference",
    "find_duplicates",
    "assert_no_mutation",
    "check_sort_result",
]


def is_strictly_increasing(xs: Sequence[int]) -> bool:
    """Return True iff xs[i] < xs[i+1] for all i."""
    return first_increasing_violation_index(xs) is None


def first_increasing_violation_index(xs: Sequence[int]) -> int | None:
    """
    Return the first index i where xs[i] >= xs[i+1], or None if strictly increasing.

    Useful for precise error messages:
        i = first_increasing_violation_index(out)
        assert i is None, f"not increasing at i={i}: {out[i]} >= {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i] >= xs[i + 1]:
            return i
    return None


def is_set_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """Return True iff `a` and `b` hold the same set of values (multiplicity ignored)."""
    return set(a) == set(b)


def set_difference(a: Sequence[int], b: Sequence[int]) -> Dict[str, List[int]]:
    """
    Return {"missing": values in a but not b, "extra": values in b but not a}.

    Both lists are sorted; both empty means the sets are equal.
    """
    sa, sb = set(a), set(b)
    return {"missing": sorted(sa - sb), "extra": sorted(sb - sa)}


def find_duplicates(xs: Sequence[int]) -> Dict[int, int]:
    """Return value -> occurrence count for every value appearing more than once."""
    return {v: c for v, c in Counter(xs).items() if c > 1}


def assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Assert that two sequences are exactly equal (element-wise), used to ensure
    a sort did not mutate its input in-place.

    Raises AssertionError with a concise message if they differ.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(
                f"Input mutated at index {i}: before={x}, after={y}"
            )


def check_sort_result(a: Sequence[int], result: "SortResult") -> List[str]:
    """
    Check a SortResult against its input. Returns a list of problems; empty means OK.
    """
    problems: List[str] = []
    out = result.values

    i = first_increasing_violation_index(out)
    if i is not None:
        problems.append(f"output not strictly increasing at i={i}: {out[i]} >= {out[i + 1]}")

    diff = set_difference(a, out)
    if diff["missing"]:
        problems.append(f"values lost: {diff['missing'][:10]}")
    if diff["extra"]:
        problems.append(f"values invented: {diff['extra'][:10]}")

    if result.original_size != len(a):
        problems.append(
            f"original_size={result.original_size} but input has {len(a)} elements"
        )
    if result.result_size != len(out):
        problems.append(
            f"result_size={result.result_size} but output has {len(out)} elements"
        )
    if len(a) and result.presence_vector_size != max(a):
        problems.append(
            f"presence_vector_size={result.presence_vector_size} but max(input)={max(a)}"
        )
    if result.result_size < result.original_size:
        dups = find_duplicates(a)
        problems.append(
            f"result_size={result.result_size} < original_size={result.original_size}; "
            f"duplicate input values collapsed: {sorted(dups)[:10]}"
        )
    return problems

"""
Presence-vector sort for distinct positive integers.

Algorithm
---------
1. Bound discovery: max_value = max(a). Empty input has no maximum.
2. Presence marking: allocate max_value boolean slots, all False, and set
   slot v - 1 for every value v.
3. Reconstruction: scan slots 0 .. max_value - 1 in index order and emit
   i + 1 for every True slot.

The slot <-> value mapping (index = value - 1) is monotonic and bijective, and
the scan is monotonic in index, so the output is ascending without a single
key comparison. Time is O(n + max_value), space is O(max_value).

Preconditions (caller's responsibility):
- every element is a positive integer (checked before the vector is sized)
- no value appears twice (only checked in strict mode)

In non-strict mode duplicates collapse into one slot and the result is shorter
than the input; the engine logs a warning and `SortResult.collapsed` is True.

Public API (stable):
    value_to_index(value: int) -> int
    index_to_value(index: int) -> int
    SortResult
    PresenceSortEngine(strict=False, reuse_buffer=False).sort(a) -> SortResult
    presence_sort(a, *, strict=False) -> SortResult
    sort(a: list[int], *, config: dict | None = None) -> list[int]
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from bigsort.errors import (
    DuplicateValueError,
    EmptyInputError,
    NonIntegerValueError,
    NonPositiveValueError,
)

__all__ = [
    "value_to_index",
    "index_to_value",
    "SortResult",
    "PresenceSortEngine",
    "presence_sort",
    "sort",
]

logger = logging.getLogger(__name__)


def value_to_index(value: int) -> int:
    """Slot holding `value` in the presence vector (one-based value -> zero-based slot)."""
    if value < 1:
        raise NonPositiveValueError(value)
    return value - 1


def index_to_value(index: int) -> int:
    """Value encoded by slot `index` (inverse of `value_to_index`)."""
    if index < 0:
        raise ValueError(f"slot index must be nonnegative; got {index}")
    return index + 1


@dataclass(frozen=True)
class SortResult:
    """Ascending output of one sort plus the sizes of every structure involved."""

    values: List[int]
    original_size: int
    presence_vector_size: int
    result_size: int
    elapsed_ns: int

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1e6

    @property
    def collapsed(self) -> bool:
        """True when duplicates were folded into shared slots (result shorter than input)."""
        return self.result_size < self.original_size

    def metrics(self) -> Dict[str, Any]:
        return {
            "original_size": self.original_size,
            "presence_vector_size": self.presence_vector_size,
            "result_size": self.result_size,
            "elapsed_ms": self.elapsed_ms,
        }


class PresenceSortEngine:
    """
    Single-shot presence-vector sorter.

    Parameters
    ----------
    strict : bool
        If True, count marking operations and raise DuplicateValueError when
        more marks were written than slots set.
    reuse_buffer : bool
        If True, keep one scratch presence vector across calls instead of
        allocating per call. The slots a call uses are cleared before marking.
        An engine holding a scratch buffer must not be shared between threads.
    """

    def __init__(self, *, strict: bool = False, reuse_buffer: bool = False) -> None:
        self.strict = strict
        self.reuse_buffer = reuse_buffer
        self._scratch: Optional[np.ndarray] = None

    def sort(self, a: Sequence[int]) -> SortResult:
        """
        Sort distinct positive integers via a presence vector.

        The input is not mutated. Raises EmptyInputError, NonIntegerValueError,
        NonPositiveValueError, or (strict mode only) DuplicateValueError.
        """
        t0 = time.perf_counter_ns()

        # ---- Step 1: bound discovery ----
        if len(a) == 0:
            raise EmptyInputError()
        if not isinstance(a, np.ndarray) and any(isinstance(v, (bool, np.bool_)) for v in a):
            # np.asarray would silently turn True/False into 1/0.
            raise NonIntegerValueError("bool")
        values = np.asarray(a)
        if values.dtype.kind not in "iu":
            raise NonIntegerValueError(str(values.dtype))
        values = values.ravel()
        # Reject before sizing anything by max: [10**11, -1] must not allocate.
        _raise_first_non_positive(values)
        max_value = int(values.max())

        # ---- Step 2: presence marking ----
        presence = self._acquire(max_value)
        slots = values - 1
        presence[slots] = True
        if self.strict:
            marks = int(slots.size)
            set_slots = int(np.count_nonzero(presence))
            if marks > set_slots:
                _raise_first_duplicate(values)

        # ---- Step 3: reconstruction ----
        # flatnonzero walks slots in increasing index order.
        out = (np.flatnonzero(presence) + 1).tolist()

        t1 = time.perf_counter_ns()

        result = SortResult(
            values=out,
            original_size=int(values.size),
            presence_vector_size=max_value,
            result_size=len(out),
            elapsed_ns=t1 - t0,
        )
        logger.debug(
            "presence sort: n=%d presence_vector=%d result=%d elapsed_ms=%.3f",
            result.original_size,
            result.presence_vector_size,
            result.result_size,
            result.elapsed_ms,
        )
        if result.collapsed:
            logger.warning(
                "presence sort collapsed duplicates: %d input values produced %d outputs",
                result.original_size,
                result.result_size,
            )
        return result

    def _acquire(self, max_value: int) -> np.ndarray:
        if not self.reuse_buffer:
            return np.zeros(max_value, dtype=bool)
        if self._scratch is None or self._scratch.size < max_value:
            self._scratch = np.zeros(max_value, dtype=bool)
        view = self._scratch[:max_value]
        view[:] = False
        return view


def presence_sort(a: Sequence[int], *, strict: bool = False) -> SortResult:
    """Sort `a` with a fresh engine and return the full SortResult."""
    return PresenceSortEngine(strict=strict).sort(a)


def sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    """
    Algorithm-module entry point used by the benchmark harness.

    config keys:
        strict : bool (default False)
    """
    config = config or {}
    return presence_sort(a, strict=bool(config.get("strict", False))).values


# ------------------------- helpers ------------------------- #


def _raise_first_non_positive(values: np.ndarray) -> None:
    bad = np.flatnonzero(values <= 0)
    if bad.size:
        i = int(bad[0])
        raise NonPositiveValueError(int(values[i]), index=i)


def _raise_first_duplicate(values: np.ndarray) -> None:
    # First value, in input order, whose slot was already marked.
    seen = set()
    for v in map(int, values):
        if v in seen:
            raise DuplicateValueError(v, int(np.count_nonzero(values == v)))
        seen.add(v)

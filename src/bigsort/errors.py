"""
Error types raised by the presence sort and its input generators.

Every error carries the offending quantities as attributes so callers (the CLI,
tests) can report them without parsing messages.

Hierarchy:
    BigSortError (ValueError)
        EmptyInputError
        NonPositiveValueError
        NonIntegerValueError (also TypeError)
        DuplicateValueError
        RangeTooSmallError
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "BigSortError",
    "EmptyInputError",
    "NonPositiveValueError",
    "NonIntegerValueError",
    "DuplicateValueError",
    "RangeTooSmallError",
]


class BigSortError(ValueError):
    """Base class for all invalid-input errors in this package."""


class EmptyInputError(BigSortError):
    """The input has no elements, so no maximum (and no presence vector) exists."""

    def __init__(self) -> None:
        super().__init__("cannot sort an empty input: no maximum value exists")


class NonPositiveValueError(BigSortError):
    """An element is <= 0; the value -> slot mapping (v - 1) is undefined for it."""

    def __init__(self, value: int, index: Optional[int] = None) -> None:
        self.value = value
        self.index = index
        where = f" at position {index}" if index is not None else ""
        super().__init__(
            f"value {value}{where} is not a positive integer; "
            f"only values >= 1 can be placed in a presence vector"
        )


class NonIntegerValueError(BigSortError, TypeError):
    """The input holds something other than fixed-width integers."""

    def __init__(self, dtype: str) -> None:
        self.dtype = dtype
        super().__init__(f"input must contain integers only; got elements of dtype {dtype!r}")


class DuplicateValueError(BigSortError):
    """Strict mode found a value marked more than once."""

    def __init__(self, value: int, occurrences: int) -> None:
        self.value = value
        self.occurrences = occurrences
        super().__init__(
            f"value {value} appears {occurrences} times; presence sort requires distinct values"
        )


class RangeTooSmallError(BigSortError):
    """More distinct values were requested than the inclusive range can supply."""

    def __init__(self, requested: int, min_value: int, max_value: int) -> None:
        self.requested = requested
        self.min_value = min_value
        self.max_value = max_value
        self.available = max(0, max_value - min_value + 1)
        super().__init__(
            f"array size ({requested}) is greater than the number of unique values "
            f"in the range [{min_value}, {max_value}] (available={self.available})"
        )

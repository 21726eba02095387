"""
Input generators for the presence sort.

Currently implemented:
- generate_distinct(count, min_value, max_value, rng):
    `count` distinct integers drawn without replacement from an inclusive range,
    in no particular order.

- make_dataset(n, spec, rng), dispatching on spec["dist"]:
    - "random":        distinct values from params["range"] (default [1, n]).
    - "sorted":        [1, 2, ..., n].
    - "reversed":      [n, n-1, ..., 1].
    - "nearly_sorted": [1..n] then ceil(swap_frac * n) random index swaps.
    - "sparse":        distinct values from [1, n * spread]; large presence vectors.
    - "few_uniques":   n values drawn with repetition from k distinct values.
                       Violates the distinct-values precondition on purpose.

Conventions:
- Ranges are **inclusive** on both ends.
- Every distribution except "few_uniques" yields distinct positive integers.
- Returns a Python `list[int]` (algorithms stay NumPy-agnostic).
- The caller supplies the RNG; nothing here seeds global state.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from bigsort.errors import RangeTooSmallError

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "reversed",
    "nearly_sorted",
    "sparse",
    "few_uniques",
}
__all__ = ["SUPPORTED_DISTS", "generate_distinct", "make_dataset"]


def generate_distinct(
    count: int, min_value: int, max_value: int, rng: np.random.Generator
) -> List[int]:
    """
    Draw `count` distinct integers from [min_value, max_value].

    Parameters
    ----------
    count : int
        Number of values to draw. Must be >= 0.
    min_value, max_value : int
        Inclusive bounds of the supply range.
    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        Exactly `count` distinct integers, in random order.

    Raises
    ------
    RangeTooSmallError
        If count > max_value - min_value + 1.
    ValueError
        If arguments are not integers, count is negative, or min_value > max_value.
    """
    if not _is_int_like(count) or not _is_int_like(min_value) or not _is_int_like(max_value):
        raise ValueError("count, min_value and max_value must be integers")
    count, min_value, max_value = int(count), int(min_value), int(max_value)
    if count < 0:
        raise ValueError(f"count must be nonnegative; got {count}")
    if min_value > max_value:
        raise ValueError(f"range invalid: min > max ({min_value} > {max_value})")

    span = max_value - min_value + 1
    if count > span:
        raise RangeTooSmallError(count, min_value, max_value)
    if count == 0:
        return []

    # choice(replace=False) returns the picks already shuffled.
    offsets = rng.choice(span, size=count, replace=False)
    return (offsets.astype(np.int64) + min_value).tolist()


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "random", "params": {"range": [1, 1_000_000]}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "sparse", "params": {"spread": 100}}
            {"dist": "few_uniques", "params": {"k": 10}}
            {"dist": "sorted"} / {"dist": "reversed"}

    rng : numpy.random.Generator
        Unused by the deterministic distributions ("sorted", "reversed").

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    RangeTooSmallError
        If a "random" range cannot supply n distinct values.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}

    if dist == "random":
        lo, hi = _parse_positive_range(params, default=(1, max(n, 1)))
        return generate_distinct(n, lo, hi, rng)

    if dist == "sorted":
        return list(range(1, n + 1))

    if dist == "reversed":
        return list(range(n, 0, -1))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(1, n + 1))
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            # i == j is a no-op; effective swaps may be fewer than requested.
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "sparse":
        spread = _parse_spread(params)
        return generate_distinct(n, 1, max(n, 1) * spread, rng)

    if dist == "few_uniques":
        k = _parse_k(params)
        if n == 0:
            return []
        actual_k = min(k, n)
        pool = generate_distinct(actual_k, 1, max(actual_k, n), rng)
        idxs = rng.integers(0, actual_k, size=n)
        return [pool[int(t)] for t in idxs]

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_positive_range(params: Dict[str, Any], default: Tuple[int, int]) -> Tuple[int, int]:
    """
    Parse an optional inclusive range params["range"] == [min, max].
    Both bounds must be >= 1 since the output feeds a presence vector.
    """
    if "range" not in params:
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo < 1:
        raise ValueError(f"params.range must start at 1 or above; got min={lo}")
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """swap_frac in [0.0, 1.0]; defaults to 0.05."""
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _parse_spread(params: Dict[str, Any]) -> int:
    spread = params.get("spread", 100)
    if not _is_int_like(spread) or int(spread) < 1:
        raise ValueError(f"sparse.params.spread must be an integer >= 1; got {spread!r}")
    return int(spread)


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, but not bools.
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)

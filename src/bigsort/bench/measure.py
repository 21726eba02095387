"""
Repeated wall-clock timing of one algorithm on one input.

Each sample times a single `sort(a, config=...)` call end to end, so it
includes whatever input conversion the algorithm does. The presence sort's
own `SortResult.elapsed_ns` covers bound discovery through reconstruction
only, which is why the two numbers differ slightly.

Public API (stable):
    time_sort_call(...) -> dict

The returned record:
    algo                  name passed in
    repeats               samples requested
    samples_ns            one int per call that returned
    status                "ok", "timeout", "error" or "invalid"
    error                 failure text, None when status is "ok"
    timed_out_on_repeat   repeat index that crossed the threshold, else None

A call whose output differs from `expected` is "invalid": for the presence
sort that is what duplicate input looks like (collapsed output).
"""

from __future__ import annotations

import gc
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

__all__ = ["time_sort_call"]

logger = logging.getLogger(__name__)

SortFn = Callable[..., List[int]]


@contextmanager
def _gc_paused(enabled: bool) -> Iterator[None]:
    """Collect once, then keep the collector off until the block exits."""
    if not enabled:
        yield
        return
    was_on = gc.isenabled()
    gc.collect()
    gc.disable()
    try:
        yield
    finally:
        if was_on:
            gc.enable()


def _fail(record: Dict[str, Any], status: str, message: str) -> Dict[str, Any]:
    record["status"] = status
    record["error"] = message
    return record


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: SortFn,
    a: List[int],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool = True,
    disable_gc: bool = True,
    timeout_seconds: float = 10.0,
    defensive_copy: bool = True,
    expected: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Call `algo_fn(a, config=config)` `repeats` times and record each duration.

    Parameters
    ----------
    algo_name : str
        Label copied into the record and log lines.
    algo_fn : callable
        An algorithm module's `sort`.
    a : list[int]
        The shared input for this size.
    config : dict | None
        Forwarded to every call as-is.
    repeats : int
        How many timed calls to make.
    warmup : bool
        Run one untimed call before sampling; a failure there ends the run.
    disable_gc : bool
        Pause the garbage collector for the sampling loop.
    timeout_seconds : float
        Sampling stops after the first call slower than this.
    defensive_copy : bool
        Hand each call its own copy of `a`, built before the clock starts.
    expected : list[int] | None
        Reference output; only the first sample's output is compared.

    Raises
    ------
    ValueError
        If `repeats` is negative or `timeout_seconds` is not positive.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    record: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    def _input() -> List[int]:
        return list(a) if defensive_copy else a

    if warmup and repeats > 0:
        try:
            algo_fn(_input(), config=config)
        except Exception as e:
            logger.warning("%s: warmup failed on n=%d: %r", algo_name, len(a), e)
            return _fail(record, "error", f"warmup failed: {e!r}")

    limit_ns = int(timeout_seconds * 1e9)
    with _gc_paused(disable_gc):
        for r in range(repeats):
            arg = _input()
            try:
                started = time.perf_counter_ns()
                out = algo_fn(arg, config=config)
                took = time.perf_counter_ns() - started
            except Exception as e:
                logger.warning("%s: run %d failed on n=%d: %r", algo_name, r, len(a), e)
                _fail(record, "error", f"run failed at repeat {r}: {e!r}")
                break

            record["samples_ns"].append(int(took))

            if r == 0 and expected is not None and out != expected:
                _fail(record, "invalid", "output does not match the oracle")
                break
            if took > limit_ns:
                record["status"] = "timeout"
                record["timed_out_on_repeat"] = r
                break

    return record

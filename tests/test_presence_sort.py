"""
Correctness tests for the presence sort against the oracle (Python's built-in sorted).

What we check:
- Output exactly matches the oracle for distinct positive input
- Strictly increasing order and set-equality (diagnostic)
- Presence vector sized to max(input), metrics consistent
- No input mutation (API contract)
- Determinism and independence from input order
- Error taxonomy: empty, non-positive, non-integer, duplicates (strict mode)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from bigsort.algorithms import presence_sort as algo_module
from bigsort.algorithms.presence_sort import (
    PresenceSortEngine,
    index_to_value,
    presence_sort,
    value_to_index,
)
from bigsort.errors import (
    BigSortError,
    DuplicateValueError,
    EmptyInputError,
    NonIntegerValueError,
    NonPositiveValueError,
)
from bigsort.validate import (
    check_sort_result,
    is_set_equal,
    is_strictly_increasing,
    oracle_sort,
)


# ------------------------- helpers ------------------------- #

def _check_one(a: List[int], *, strict: bool = False) -> None:
    """Common assertion bundle for one distinct input."""
    a_before = list(a)
    result = presence_sort(a, strict=strict)

    assert a == a_before, "Sort must not mutate its input"
    assert result.values == oracle_sort(a), "Output must exactly match the oracle"
    assert is_strictly_increasing(result.values)
    assert is_set_equal(a, result.values)
    assert result.original_size == len(a)
    assert result.result_size == result.original_size
    assert result.presence_vector_size == max(a)
    assert not result.collapsed
    assert check_sort_result(a, result) == []

    again = presence_sort(a, strict=strict)
    assert again.values == result.values, "Sort must be deterministic"


# ------------------------- index mapping ------------------------- #

@pytest.mark.parametrize("value, index", [(1, 0), (2, 1), (42, 41), (10**9, 10**9 - 1)])
def test_value_index_mapping_roundtrip(value: int, index: int) -> None:
    assert value_to_index(value) == index
    assert index_to_value(index) == value


def test_value_to_index_rejects_non_positive() -> None:
    with pytest.raises(NonPositiveValueError):
        value_to_index(0)


def test_index_to_value_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        index_to_value(-1)


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize(
    "a",
    [
        [1],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [10, 1],
        [7, 100, 3, 55, 2],
        list(range(1, 21)),
        list(range(20, 0, -1)),
        [1_000_000, 1],
    ],
)
def test_unit_cases(a: List[int]) -> None:
    _check_one(a)
    _check_one(a, strict=True)


def test_worked_example_metrics() -> None:
    result = presence_sort([5, 3, 9, 1])
    assert result.values == [1, 3, 5, 9]
    assert result.original_size == 4
    assert result.presence_vector_size == 9
    assert result.result_size == 4
    assert result.elapsed_ns >= 0
    assert result.elapsed_ms == result.elapsed_ns / 1e6
    assert set(result.metrics()) == {
        "original_size", "presence_vector_size", "result_size", "elapsed_ms"
    }


def test_worked_example_true_slots(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = PresenceSortEngine()
    acquired: List[np.ndarray] = []
    original_acquire = engine._acquire

    def _capture(max_value: int) -> np.ndarray:
        vec = original_acquire(max_value)
        acquired.append(vec)
        return vec

    monkeypatch.setattr(engine, "_acquire", _capture)
    result = engine.sort([5, 3, 9, 1])

    assert len(acquired) == 1
    vec = acquired[0]
    assert vec.size == 9
    # Slots {0, 2, 4, 8} hold values {1, 3, 5, 9}.
    assert np.flatnonzero(vec).tolist() == [0, 2, 4, 8]
    assert [value_to_index(v) for v in result.values] == [0, 2, 4, 8]


def test_single_element_boundary() -> None:
    result = presence_sort([42])
    assert result.values == [42]
    assert result.presence_vector_size == 42
    assert result.result_size == 1


def test_accepts_numpy_input_without_mutation() -> None:
    a = np.array([9, 4, 6], dtype=np.int32)
    before = a.copy()
    result = presence_sort(a)
    assert result.values == [4, 6, 9]
    assert all(isinstance(v, int) for v in result.values)
    np.testing.assert_array_equal(a, before)


def test_module_sort_entry_point() -> None:
    assert algo_module.sort([3, 1, 2]) == [1, 2, 3]
    assert algo_module.sort([3, 1, 2], config={"strict": True}) == [1, 2, 3]
    with pytest.raises(DuplicateValueError):
        algo_module.sort([2, 2], config={"strict": True})


# ------------------------- errors ------------------------- #

def test_empty_input_raises_before_allocation(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = PresenceSortEngine()

    def _fail(_max_value: int) -> np.ndarray:
        raise AssertionError("presence vector allocated for empty input")

    monkeypatch.setattr(engine, "_acquire", _fail)
    with pytest.raises(EmptyInputError):
        engine.sort([])


def test_non_positive_value_is_reported() -> None:
    with pytest.raises(NonPositiveValueError) as exc:
        presence_sort([3, -1, 5])
    assert exc.value.value == -1
    assert exc.value.index == 1
    assert "-1" in str(exc.value)


def test_zero_is_rejected() -> None:
    with pytest.raises(NonPositiveValueError) as exc:
        presence_sort([2, 0])
    assert exc.value.value == 0


def test_all_non_positive_rejected_without_allocation(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = PresenceSortEngine()
    monkeypatch.setattr(engine, "_acquire", lambda m: pytest.fail("allocated"))
    with pytest.raises(NonPositiveValueError) as exc:
        engine.sort([-4, -2, 0])
    assert exc.value.value == -4


def test_negative_value_rejected_before_sizing_by_large_max(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = PresenceSortEngine()
    monkeypatch.setattr(engine, "_acquire", lambda m: pytest.fail(f"allocated {m} slots"))
    with pytest.raises(NonPositiveValueError) as exc:
        engine.sort([10**11, -1])
    assert exc.value.value == -1
    assert exc.value.index == 1


@pytest.mark.parametrize("a", [[True, 3], [2, False], np.array([True, False])])
def test_bool_input_rejected(a) -> None:
    with pytest.raises(NonIntegerValueError):
        presence_sort(a)


@pytest.mark.parametrize("a", [[1.5, 2.0], ["a", "b"], [2**70, 1]])
def test_non_integer_input_rejected(a: list) -> None:
    with pytest.raises(NonIntegerValueError):
        presence_sort(a)


def test_errors_share_base_class() -> None:
    for exc_type in (EmptyInputError, NonPositiveValueError, DuplicateValueError):
        assert issubclass(exc_type, BigSortError)
        assert issubclass(exc_type, ValueError)
    assert issubclass(NonIntegerValueError, TypeError)


# ------------------------- duplicates ------------------------- #

def test_strict_mode_detects_duplicate() -> None:
    with pytest.raises(DuplicateValueError) as exc:
        presence_sort([4, 4, 7], strict=True)
    assert exc.value.value == 4
    assert exc.value.occurrences == 2


def test_strict_mode_reports_first_repeated_value_in_input_order() -> None:
    with pytest.raises(DuplicateValueError) as exc:
        presence_sort([9, 2, 5, 9, 2], strict=True)
    assert exc.value.value == 9


def test_non_strict_mode_collapses_duplicates(caplog: pytest.LogCaptureFixture) -> None:
    # Expected (if undesirable) behaviour: duplicates share a slot and vanish.
    with caplog.at_level(logging.WARNING, logger="bigsort.algorithms.presence_sort"):
        result = presence_sort([4, 4, 7])
    assert result.values == [4, 7]
    assert result.original_size == 3
    assert result.result_size == 2
    assert result.collapsed
    assert any("collapsed" in r.getMessage() for r in caplog.records)
    problems = check_sort_result([4, 4, 7], result)
    assert any("collapsed" in p for p in problems)


# ------------------------- scratch buffer ------------------------- #

def test_reused_buffer_is_cleared_between_calls() -> None:
    engine = PresenceSortEngine(reuse_buffer=True)
    first = engine.sort([10, 2, 7])
    second = engine.sort([5, 1])
    third = engine.sort([3, 8])
    assert first.values == [2, 7, 10]
    assert second.values == [1, 5]
    assert second.presence_vector_size == 5
    assert third.values == [3, 8]


def test_reused_buffer_cleared_after_strict_failure() -> None:
    engine = PresenceSortEngine(strict=True, reuse_buffer=True)
    with pytest.raises(DuplicateValueError):
        engine.sort([6, 6, 3])
    assert engine.sort([4, 1]).values == [1, 4]


# ------------------------- threads ------------------------- #

def _distinct_inputs(count: int) -> List[List[int]]:
    rng = np.random.default_rng(99)
    return [
        (rng.choice(50_000, size=2_000, replace=False) + 1).tolist()
        for _ in range(count)
    ]


def test_parallel_sorts_do_not_share_state() -> None:
    inputs = _distinct_inputs(16)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(presence_sort, inputs))
    for a, result in zip(inputs, results):
        assert result.values == oracle_sort(a)
        assert result.presence_vector_size == max(a)


def test_parallel_strict_engines_one_per_thread() -> None:
    inputs = _distinct_inputs(8)

    def _sort(a: List[int]) -> List[int]:
        return PresenceSortEngine(strict=True, reuse_buffer=True).sort(a).values

    with ThreadPoolExecutor(max_workers=4) as pool:
        outputs = list(pool.map(_sort, inputs))
    assert outputs == [oracle_sort(a) for a in inputs]


# ------------------------- property-based tests (randomized) ------------------------- #

distinct_small = st.lists(st.integers(min_value=1, max_value=5_000), min_size=1, max_size=400, unique=True)


@settings(deadline=None, max_examples=100)
@given(distinct_small)
def test_property_distinct_small_range(a: List[int]) -> None:
    _check_one(a)


@settings(deadline=None, max_examples=40)
@given(st.lists(st.integers(min_value=1, max_value=2_000_000), min_size=1, max_size=200, unique=True))
def test_property_distinct_wide_range(a: List[int]) -> None:
    _check_one(a, strict=True)


@settings(deadline=None, max_examples=60)
@given(distinct_small.flatmap(lambda a: st.tuples(st.just(a), st.permutations(a))))
def test_property_permutation_invariant(pair) -> None:
    a, permuted = pair
    assert presence_sort(a).values == presence_sort(list(permuted)).values


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=1, max_value=50), min_size=1, max_size=300))
def test_property_duplicates_collapse_to_distinct_set(a: List[int]) -> None:
    result = presence_sort(a)
    assert result.values == sorted(set(a))
    assert result.result_size == len(set(a))
    assert result.collapsed == (len(set(a)) < len(a))
    if result.collapsed:
        with pytest.raises(DuplicateValueError):
            presence_sort(a, strict=True)

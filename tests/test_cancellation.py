"""
Cooperative cancellation: a cancelled run stops at the next suspension
point and leaves the array a valid permutation of its input.
"""

from __future__ import annotations

import asyncio
from collections import Counter

import pytest
from hypothesis import given, settings, strategies as st

from algorithms import Cancelled, SortError, StepKind
from algorithms.bubble_sort import bubble_sort
from algorithms.selection_sort import selection_sort
from engine import CancelToken


ENGINES = [selection_sort, bubble_sort]


@pytest.mark.parametrize("engine", ENGINES)
@settings(max_examples=60, deadline=None)
@given(
    a=st.lists(st.integers(min_value=0, max_value=50), min_size=2, max_size=10),
    k=st.integers(min_value=0, max_value=200),
)
def test_cancel_after_k_steps_leaves_a_permutation(engine, a, k):
    original = list(a)
    token = CancelToken()
    steps = []

    def emit(step):
        steps.append(step)
        if step.step_number == k:
            token.cancel("test")

    try:
        asyncio.run(engine(a, emit, cancel=token))
    except Cancelled as exc:
        assert exc.steps_emitted == k + 1
        assert exc.array is a
        assert len(steps) == k + 1
    else:
        # the run finished before reaching step k
        assert len(steps) <= k
        assert a == sorted(original)

    assert Counter(a) == Counter(original)


@pytest.mark.parametrize("engine", ENGINES)
def test_cancel_before_start_stops_after_first_step(engine):
    token = CancelToken()
    token.cancel()
    steps = []

    with pytest.raises(Cancelled) as info:
        asyncio.run(engine([3, 2, 1], steps.append, cancel=token))

    assert len(steps) == 1
    assert info.value.steps_emitted == 1


def test_cancel_during_swap_leaves_array_unexchanged():
    token = CancelToken()
    a = [2, 1]

    def emit(step):
        if step.kind is StepKind.SWAP:
            token.cancel()

    with pytest.raises(Cancelled):
        asyncio.run(bubble_sort(a, emit, cancel=token))
    assert a == [2, 1]


def test_cancel_during_swapped_keeps_the_exchange():
    token = CancelToken()
    a = [2, 1]

    def emit(step):
        if step.kind is StepKind.SWAPPED:
            token.cancel()

    with pytest.raises(Cancelled):
        asyncio.run(bubble_sort(a, emit, cancel=token))
    assert a == [1, 2]


def test_cancel_observed_after_wait():
    token = CancelToken()
    steps = []

    async def wait(kind):
        token.cancel("timer")

    with pytest.raises(Cancelled):
        asyncio.run(selection_sort([3, 1, 2], steps.append, wait=wait, cancel=token))

    # CANDIDATE(0) then COMPARE(0, 1), whose wait flipped the token
    assert [s.kind for s in steps] == [StepKind.CANDIDATE, StepKind.COMPARE]


def test_cancelled_is_a_sort_error_not_a_value_error():
    assert issubclass(Cancelled, SortError)
    assert not issubclass(Cancelled, ValueError)


def test_cancel_token_records_reason():
    token = CancelToken()
    assert not token.cancelled
    token.cancel("user left")
    assert token.cancelled
    assert token.reason == "user left"


def test_asyncio_task_cancellation_propagates():
    async def main():
        a = [5, 4, 3, 2, 1]

        async def slow_wait(kind):
            await asyncio.sleep(10)

        task = asyncio.ensure_future(bubble_sort(a, lambda s: None, wait=slow_wait))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return a

    a = asyncio.run(main())
    assert sorted(a) == [1, 2, 3, 4, 5]

"""
Pacing presets, the run driver and its logging.
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from algorithms import Cancelled, DelayKind, InvalidInput, SortAlgorithm, StepKind
from engine import CancelToken, Pacing, SPEED_PRESETS, no_delay, run_sort, visualize
from ui import BarRenderer


# ------------------------- pacing ------------------------- #

def test_default_pacing_is_50_and_100_ms():
    pacing = Pacing()
    assert pacing.delay_for(DelayKind.COMPARE) == pytest.approx(0.05)
    assert pacing.delay_for(DelayKind.SWAP) == pytest.approx(0.1)
    assert pacing.delay_ms(DelayKind.COMPARE) == 50
    assert pacing.delay_ms(DelayKind.SWAP) == 100


@pytest.mark.parametrize("name", list(SPEED_PRESETS))
def test_presets_build(name):
    pacing = Pacing.preset(name)
    assert (pacing.compare_delay, pacing.swap_delay) == SPEED_PRESETS[name]
    assert pacing.swap_delay > pacing.compare_delay


def test_unknown_preset():
    with pytest.raises(InvalidInput):
        Pacing.preset("ludicrous")


@pytest.mark.parametrize("name", [["fast"], {"fast": 1}, None])
def test_preset_name_must_be_string(name):
    with pytest.raises(InvalidInput):
        Pacing.preset(name)


@pytest.mark.parametrize("compare_delay, swap_delay", [
    (0, 0.1), (0.05, -1), ("fast", 0.1), (True, 0.1),
    (float("nan"), 0.1), (0.05, float("inf")), (float("-inf"), 0.1),
])
def test_delays_must_be_positive_numbers(compare_delay, swap_delay):
    with pytest.raises(InvalidInput):
        Pacing(compare_delay=compare_delay, swap_delay=swap_delay)


def test_pacing_is_awaitable_strategy():
    asyncio.run(Pacing(compare_delay=0.001, swap_delay=0.001)(DelayKind.SWAP))
    asyncio.run(no_delay(DelayKind.COMPARE))


# ------------------------- runner ------------------------- #

def test_run_sort_forwards_every_step():
    steps = []
    a = [3, 1, 2]
    result = asyncio.run(run_sort("bubble_sort", a, steps.append, pacing=no_delay))
    assert result == [1, 2, 3]
    assert steps[-1].kind is StepKind.SORTED


def test_run_sort_accepts_enum_and_async_consumer():
    seen = []

    async def on_step(step):
        await asyncio.sleep(0)
        seen.append(step.kind)

    asyncio.run(run_sort(SortAlgorithm.SELECTION_SORT, [2, 1], on_step))
    assert StepKind.SWAP in seen


def test_run_sort_unknown_algorithm():
    steps = []
    with pytest.raises(InvalidInput):
        asyncio.run(run_sort("heap_sort", [2, 1], steps.append))
    assert steps == []


def test_run_sort_empty_array():
    with pytest.raises(InvalidInput):
        asyncio.run(run_sort("bubble_sort", [], lambda s: None))


def test_run_sort_logs_start_and_finish(caplog):
    caplog.set_level(logging.INFO, logger="engine.runner")
    asyncio.run(run_sort("selection_sort", [2, 1], lambda s: None))
    messages = [r.getMessage() for r in caplog.records]
    assert any("Starting Selection Sort" in m for m in messages)
    assert any("finished" in m for m in messages)


def test_run_sort_logs_and_reraises_cancellation(caplog):
    caplog.set_level(logging.INFO, logger="engine.runner")
    token = CancelToken()
    token.cancel()
    with pytest.raises(Cancelled):
        asyncio.run(run_sort("bubble_sort", [2, 1], lambda s: None, cancel=token))
    assert any("cancelled" in r.getMessage() for r in caplog.records)


def test_visualize_drives_a_renderer():
    renderer = BarRenderer()
    a = [4, 3, 2, 1]
    asyncio.run(visualize("bubble_sort", a, renderer, pacing=no_delay))

    assert a == [1, 2, 3, 4]
    assert renderer.array == [1, 2, 3, 4]
    assert renderer.sorted_set == {0, 1, 2, 3}
    assert renderer.arrow is None

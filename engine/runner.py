"""
runner.py — Run Driver
=======================
Connects a sort engine to whoever consumes its Steps.

    await run_sort("selection_sort", arr, on_step, pacing=Pacing())
    await visualize("bubble_sort", arr, BarRenderer(), cancel=token)

Control flows one way: the engine emits, the consumer applies, the
engine waits, the engine proceeds.  Consumers run on the event loop's
thread, which is the UI-owned context for any host driving this.
"""

import inspect
import logging
from typing import Any, List, Optional, Union

from algorithms import SortAlgorithm, get_algorithm
from algorithms.errors import Cancelled
from algorithms.step import EmitFn, Step, WaitFn, validate_array
from engine.cancel import CancelToken
from engine.pacing import Pacing

logger = logging.getLogger(__name__)


async def run_sort(
    algo: Union[str, SortAlgorithm],
    array: List[int],
    on_step: EmitFn,
    *,
    pacing: Optional[WaitFn] = None,
    cancel: Optional[CancelToken] = None,
) -> List[int]:
    """
    Run one engine over `array` (sorted in place) and forward every Step
    to `on_step`.  InvalidInput is raised before any Step goes out;
    Cancelled is logged and re-raised for the caller to treat as a
    normal early stop.
    """
    info = get_algorithm(algo)
    validate_array(array)

    async def emit(step: Step) -> None:
        logger.debug(f"{info.key} #{step.step_number}: {step.kind.value} {step.indices}")
        result = on_step(step)
        if inspect.isawaitable(result):
            await result

    logger.info(f"Starting {info.label} on {len(array)} element(s)")
    try:
        result = await info.fn(array, emit, wait=pacing, cancel=cancel)
    except Cancelled as exc:
        logger.info(f"{info.label} cancelled after {exc.steps_emitted} step(s)")
        raise
    logger.info(f"{info.label} finished: {len(array)} element(s) sorted")
    return result


async def visualize(
    algo: Union[str, SortAlgorithm],
    array: List[int],
    renderer: Any,
    *,
    pacing: Optional[WaitFn] = None,
    cancel: Optional[CancelToken] = None,
) -> List[int]:
    """
    Animate a run on `renderer` (anything with reset(array) and
    apply_step(step)).  Uses real Pacing unless told otherwise.
    """
    validate_array(array)
    renderer.reset(array)
    return await run_sort(
        algo, array, renderer.apply_step,
        pacing=pacing if pacing is not None else Pacing(),
        cancel=cancel,
    )

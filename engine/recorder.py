"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete sort run (all Steps), then computes the analytics
metrics the UI needs for the Analytics panel and Comparison Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="selection_sort", array=[5, 3, 4, 1, 2])
    rec.run_to_completion()          # zero-delay run, every Step kept
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for replay

The Recorder sorts its OWN copy of the array; the caller's list is
never touched.

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both to completion
    on the SAME array, then calls compare(rec1, rec2) → ComparisonResult.
"""

import asyncio
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.errors import Cancelled
from algorithms.step import Step, StepKind, WaitFn, validate_array
from engine.cancel import CancelToken
from engine.pacing import no_delay
from engine.runner import run_sort

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    array_size:      int   = 0
    comparisons:     int   = 0          # COMPARE steps
    swaps:           int   = 0          # SWAP steps (each is followed by a SWAPPED)
    candidate_marks: int   = 0          # CANDIDATE steps (selection sort only)
    sorted_marks:    int   = 0          # SORTED steps
    total_steps:     int   = 0          # number of Steps emitted
    wall_time_ms:    float = 0.0        # wall-clock time to run to completion
    is_sorted:       bool  = False      # final array non-decreasing?
    cancelled:       bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_steps:       str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after a run).
        result  : The recorder's copy of the array after the run.
        on_step : Optional callback(Step) fired for every Step as it is
                  recorded (a renderer can hook in here).
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.steps:    List[Step]           = []
        self.metrics:  Optional[RunMetrics] = None
        self.result:   List[int]            = []
        self.on_step:  Optional[Callable[[Step], None]] = on_step

        self._algo_info: Optional[AlgoInfo] = None
        self._input:     List[int]          = []

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, array: List[int]) -> None:
        """Validate and stage a run.  Raises InvalidInput on bad input."""
        info = get_algorithm(algo_key)
        validate_array(array)

        self._algo_info = info
        self._input     = list(array)
        self.result     = list(array)
        self.steps      = []
        self.metrics    = None

    async def run(
        self,
        pacing: Optional[WaitFn] = None,
        cancel: Optional[CancelToken] = None,
    ) -> RunMetrics:
        """Run the staged algorithm, record every step, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        cancelled = False
        start = time.monotonic()
        try:
            await run_sort(
                self._algo_info.key, self.result, self.record_step,
                pacing=pacing if pacing is not None else no_delay,
                cancel=cancel,
            )
        except Cancelled:
            cancelled = True
        wall_ms = (time.monotonic() - start) * 1000

        self.metrics = self._compute_metrics(wall_ms, cancelled)
        logger.debug(f"Recorded {len(self.steps)} step(s) for {self._algo_info.key}")
        return self.metrics

    def run_to_completion(self, cancel: Optional[CancelToken] = None) -> RunMetrics:
        """Blocking zero-delay run, for hosts without an event loop."""
        return asyncio.run(self.run(cancel=cancel))

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Step access
    # ------------------------------------------------------------------
    def record_step(self, step: Step) -> None:
        self.steps.append(step)
        if self.on_step:
            self.on_step(step)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "input":    list(self._input),
            "result":   list(self.result),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float, cancelled: bool) -> RunMetrics:
        info = self._algo_info

        counts = {kind: 0 for kind in StepKind}
        for s in self.steps:
            counts[s.kind] += 1

        is_sorted = all(self.result[k] <= self.result[k + 1] for k in range(len(self.result) - 1))

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            array_size=len(self._input),
            comparisons=counts[StepKind.COMPARE],
            swaps=counts[StepKind.SWAP],
            candidate_marks=counts[StepKind.CANDIDATE],
            sorted_marks=counts[StepKind.SORTED],
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            is_sorted=is_sorted,
            cancelled=cancelled,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps      =winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )

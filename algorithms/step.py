"""
step.py — Sort Step Events
===========================
Every sort engine is a coroutine that emits Step objects.
A Step is a frozen-in-time picture of everything the renderer
needs to draw one frame:

    • What happened (compare / candidate / swap / swapped / sorted)
    • Which indices it happened to
    • The array as it looked when the decision was made
    • Which indices are already in their final position
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened

Design decisions:
  - Step is a plain frozen dataclass.  It is a SNAPSHOT.  The engine is
    the only writer; renderers and recorders are pure readers.
  - COMPARE is emitted *before* the engine acts on the comparison, SWAP
    is emitted *before* the exchange and is always followed by SWAPPED
    carrying the exchanged array.  A renderer therefore always shows
    the state that produced a decision, then the state that resulted.
  - `highlights` is a shallow {index: role} dict so the renderer can
    colour bars in one pass.  SORTED always wins over the other roles,
    see Step.roles().
"""

import inspect
from collections.abc import MutableSequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from algorithms.errors import Cancelled, InvalidInput


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class StepKind(Enum):
    COMPARE   = "compare"     # two indices are being compared
    CANDIDATE = "candidate"   # new current minimum (selection sort)
    SWAP      = "swap"        # two indices are about to be exchanged
    SWAPPED   = "swapped"     # the array right after the exchange
    SORTED    = "sorted"      # index reached its final position


class HighlightRole(Enum):
    CANDIDATE = "candidate"
    COMPARED  = "compared"
    SWAPPED   = "swapped"
    SORTED    = "sorted"


class DelayKind(Enum):
    """Which pause follows an event.  Only compares and swaps are paced."""
    COMPARE = "compare"
    SWAP    = "swap"


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : What happened (StepKind).
        indices         : The indices involved, (i,) or (i, j).
        array           : Snapshot of the array at emit time.
        sorted_set      : Snapshot of the indices already in final position.
        highlights      : {index: HighlightRole} for this step only.
        step_number     : 0-based index of this step in the run.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text.
    """

    kind:             StepKind
    indices:          Tuple[int, ...]              = ()
    array:            Tuple[int, ...]              = ()
    sorted_set:       FrozenSet[int]               = frozenset()
    highlights:       Dict[int, HighlightRole]     = field(default_factory=dict)
    step_number:      int                          = 0
    pseudocode_line:  int                          = 0
    explanation:      str                          = ""

    @property
    def i(self) -> int:
        return self.indices[0]

    @property
    def j(self) -> Optional[int]:
        return self.indices[1] if len(self.indices) > 1 else None

    @property
    def delay_kind(self) -> Optional[DelayKind]:
        """The pause the engine takes after this step, if any."""
        return _DELAY_AFTER.get(self.kind)

    def roles(self) -> Dict[int, HighlightRole]:
        """Highlight map with every sorted index forced to SORTED."""
        roles = {
            idx: role
            for idx, role in self.highlights.items()
            if idx not in self.sorted_set
        }
        for idx in self.sorted_set:
            roles[idx] = HighlightRole.SORTED
        return roles

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":            self.kind.value,
            "indices":         list(self.indices),
            "array":           list(self.array),
            "sorted_set":      sorted(self.sorted_set),
            "highlights":      {str(k): v.value for k, v in self.highlights.items()},
            "step_number":     self.step_number,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
        }


_DELAY_AFTER: Dict[StepKind, DelayKind] = {
    StepKind.COMPARE: DelayKind.COMPARE,
    StepKind.SWAP:    DelayKind.SWAP,
    StepKind.SWAPPED: DelayKind.SWAP,
}

EmitFn = Callable[[Step], Optional[Awaitable[None]]]
WaitFn = Callable[[DelayKind], Awaitable[None]]


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------
def validate_array(array: Any) -> None:
    """Fail fast on anything a sort engine cannot work on in place."""
    if not isinstance(array, MutableSequence):
        raise InvalidInput(
            f"Expected a mutable sequence of integers, got {type(array).__name__}"
        )
    if len(array) == 0:
        raise InvalidInput("Cannot sort an empty array")
    for idx, value in enumerate(array):
        # bool is an int subclass but never a meaningful bar height
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(
                f"Element {idx} is {value!r}; only integers can be sorted"
            )


# ---------------------------------------------------------------------------
# SortRun — the engines' emitter
# ---------------------------------------------------------------------------
class SortRun:
    """
    Mutable scratch-pad shared by the sort engines.  Owns the Sorted-Set,
    numbers the steps, snapshots the array, paces the run and checks for
    cancellation after every suspension point.

    Usage inside an engine:
        run = SortRun(array, emit, wait=wait, cancel=cancel)
        await run.compare(0, 1, line=5, explanation="…")
        if array[1] < array[0]:
            await run.swap(0, 1, line=8, explanation="…")
        await run.mark_sorted(0, line=9, explanation="…")
    """

    def __init__(
        self,
        array: List[int],
        emit: EmitFn,
        wait: Optional[WaitFn] = None,
        cancel: Optional[Any] = None,
    ):
        validate_array(array)
        self.array:         List[int]        = array
        self.sorted_set:    Set[int]         = set()
        self.steps_emitted: int              = 0
        self._emit_fn:      EmitFn           = emit
        self._wait_fn:      Optional[WaitFn] = wait
        self._cancel                         = cancel

    @property
    def n(self) -> int:
        return len(self.array)

    # -- events --
    async def compare(
        self,
        a: int,
        b: int,
        roles: Tuple[HighlightRole, HighlightRole] = (HighlightRole.COMPARED, HighlightRole.COMPARED),
        line: int = 0,
        explanation: str = "",
    ) -> None:
        await self._emit(StepKind.COMPARE, (a, b), {a: roles[0], b: roles[1]}, line, explanation)
        await self._wait(DelayKind.COMPARE)

    async def candidate(self, i: int, line: int = 0, explanation: str = "") -> None:
        await self._emit(StepKind.CANDIDATE, (i,), {i: HighlightRole.CANDIDATE}, line, explanation)

    async def swap(self, a: int, b: int, line: int = 0, explanation: str = "") -> None:
        """SWAP → pause → exchange → SWAPPED → pause."""
        roles = {a: HighlightRole.SWAPPED, b: HighlightRole.SWAPPED}
        await self._emit(StepKind.SWAP, (a, b), roles, line, explanation)
        await self._wait(DelayKind.SWAP)

        self.array[a], self.array[b] = self.array[b], self.array[a]

        await self._emit(
            StepKind.SWAPPED, (a, b), dict(roles), line,
            f"Exchanged: index {a} now holds {self.array[a]}, index {b} now holds {self.array[b]}.",
        )
        await self._wait(DelayKind.SWAP)

    async def mark_sorted(self, i: int, line: int = 0, explanation: str = "") -> None:
        self.sorted_set.add(i)
        await self._emit(StepKind.SORTED, (i,), {i: HighlightRole.SORTED}, line, explanation)

    # -- internal --
    async def _emit(
        self,
        kind: StepKind,
        indices: Tuple[int, ...],
        highlights: Dict[int, HighlightRole],
        line: int,
        explanation: str,
    ) -> None:
        step = Step(
            kind=kind,
            indices=indices,
            array=tuple(self.array),
            sorted_set=frozenset(self.sorted_set),
            highlights=highlights,
            step_number=self.steps_emitted,
            pseudocode_line=line,
            explanation=explanation,
        )
        self.steps_emitted += 1
        result = self._emit_fn(step)
        if inspect.isawaitable(result):
            await result
        self._check_cancelled()

    async def _wait(self, kind: DelayKind) -> None:
        if self._wait_fn is None:
            return
        await self._wait_fn(kind)
        self._check_cancelled()

    def _check_cancelled(self) -> None:
        if self._cancel is not None and self._cancel.cancelled:
            raise Cancelled(self.array, self.steps_emitted)

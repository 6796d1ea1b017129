"""
algorithms/__init__.py — Sort Algorithm Registry
=================================================
Single source of truth for every sort engine the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, SortAlgorithm

REGISTRY is a dict:
    {
        "selection_sort": AlgoInfo(key, label, fn, pseudocode, …),
        "bubble_sort":    AlgoInfo(…),
    }

Adding a new algorithm: write the engine coroutine, add one enum member
and one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Union

from algorithms.errors       import SortError, InvalidInput, Cancelled
from algorithms.step         import Step, StepKind, HighlightRole, DelayKind, SortRun
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _sel_pc
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bub_pc


# ---------------------------------------------------------------------------
# The enumerated variants
# ---------------------------------------------------------------------------
class SortAlgorithm(Enum):
    SELECTION_SORT = "selection_sort"
    BUBBLE_SORT    = "bubble_sort"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bubble_sort"
    label:             str                    # human label, e.g. "Bubble Sort"
    fn:                Callable               # the engine coroutine
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)
    complexity_time:   str      = ""          # e.g. "O(n²)"
    max_swaps:         str      = ""          # worst-case swap count
    description:       str      = ""          # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    SortAlgorithm.SELECTION_SORT.value: AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection, pseudocode=_sel_pc,
        tags=["comparison", "in-place", "unstable"],
        complexity_time="O(n²)", max_swaps="n - 1",
        description="Finds the leftmost minimum of the unsorted tail and swaps it forward.",
    ),

    SortAlgorithm.BUBBLE_SORT.value: AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, pseudocode=_bub_pc,
        tags=["comparison", "in-place", "stable"],
        complexity_time="O(n²)", max_swaps="n(n-1)/2",
        description="Swaps out-of-order neighbours; each pass parks the largest value at the tail.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, SortAlgorithm]) -> AlgoInfo:
    """Return AlgoInfo by key or enum member; InvalidInput if unknown."""
    if isinstance(key, SortAlgorithm):
        key = key.value
    if not isinstance(key, str):
        raise InvalidInput(f"Algorithm key must be a string, got {key!r}")
    info = REGISTRY.get(key)
    if info is None:
        raise InvalidInput(f"Unknown algorithm: {key}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "SortAlgorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "Step",
    "StepKind",
    "HighlightRole",
    "DelayKind",
    "SortRun",
    "SortError",
    "InvalidInput",
    "Cancelled",
]

"""
engine/
-------
Pacing, cancellation, run driving & recording.

    from engine import Pacing, CancelToken, run_sort, Recorder, compare
"""

from engine.pacing   import Pacing, SPEED_PRESETS, DEFAULT_PRESET, no_delay
from engine.cancel   import CancelToken
from engine.runner   import run_sort, visualize
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Pacing",
    "SPEED_PRESETS",
    "DEFAULT_PRESET",
    "no_delay",
    "CancelToken",
    "run_sort",
    "visualize",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]

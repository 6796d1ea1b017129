"""
errors.py — Sort Run Errors
============================
The whole error taxonomy of a run:

    SortError
      ├── InvalidInput   – bad array / unknown algorithm / bad delay.
      │                    Raised BEFORE any Step is emitted.
      └── Cancelled      – cooperative cancellation was observed between
                           steps.  Not a failure: the array is left as a
                           valid permutation of the input.
"""

from typing import List, Optional


class SortError(Exception):
    """Base class for everything a sort run can raise on purpose."""


class InvalidInput(SortError, ValueError):
    """Precondition violation on construction (empty array, non-int values, …)."""


class Cancelled(SortError):
    """
    Raised when a CancelToken is observed at a suspension point.

    Attributes:
        array         : The caller's array in whatever partial state it reached.
        steps_emitted : How many Steps went out before the run stopped.
    """

    def __init__(self, array: Optional[List[int]] = None, steps_emitted: int = 0):
        super().__init__(f"Sort cancelled after {steps_emitted} step(s)")
        self.array         = array
        self.steps_emitted = steps_emitted

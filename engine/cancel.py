"""
cancel.py — Cooperative Cancellation
=====================================
A CancelToken is a flag the caller flips and the engine polls.  The
engine only looks at it after an emit or a delay, never in the middle
of an exchange, so a cancelled run leaves the array a valid
permutation of its input.  That partial array is a normal terminal
state, not corruption.

    token = CancelToken()
    task  = asyncio.create_task(run_sort("bubble_sort", arr, render, cancel=token))
    …
    token.cancel("user picked another algorithm")
"""

import logging

logger = logging.getLogger(__name__)


class CancelToken:

    def __init__(self):
        self._cancelled: bool = False
        self.reason:     str  = ""

    def cancel(self, reason: str = "") -> None:
        if not self._cancelled:
            logger.debug(f"Cancellation requested: {reason or 'no reason given'}")
        self._cancelled = True
        self.reason     = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

"""
pacing.py — Delay Strategies
=============================
Engines never sleep on their own.  After every compare and every swap
they await `wait(DelayKind)`; whatever is plugged in decides how long
that takes.

    Pacing()                 – real animation pacing (50 ms / 100 ms)
    Pacing.preset("slow")    – one of SPEED_PRESETS
    no_delay                 – yields to the loop but never sleeps;
                               tests and the Recorder use it
"""

import asyncio
import math
from dataclasses import dataclass
from typing import Dict, Tuple

from algorithms.errors import InvalidInput
from algorithms.step import DelayKind


# ---------------------------------------------------------------------------
# Speed presets (compare seconds, swap seconds)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, Tuple[float, float]] = {
    "slow":   (0.4,   0.8),     # teaching mode
    "medium": (0.05,  0.1),
    "fast":   (0.02,  0.04),
    "turbo":  (0.005, 0.01),    # demo mode
}

DEFAULT_PRESET = "medium"


@dataclass(frozen=True)
class Pacing:
    """
    Attributes:
        compare_delay : Seconds to pause after each COMPARE.
        swap_delay    : Seconds to pause after each SWAP and SWAPPED.
    """

    compare_delay: float = SPEED_PRESETS[DEFAULT_PRESET][0]
    swap_delay:    float = SPEED_PRESETS[DEFAULT_PRESET][1]

    def __post_init__(self):
        for name in ("compare_delay", "swap_delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value) or value <= 0:
                raise InvalidInput(f"{name} must be a positive finite number of seconds, got {value!r}")

    @classmethod
    def preset(cls, name: str) -> "Pacing":
        if not isinstance(name, str) or name not in SPEED_PRESETS:
            raise InvalidInput(f"Unknown speed preset: {name}")
        compare_delay, swap_delay = SPEED_PRESETS[name]
        return cls(compare_delay=compare_delay, swap_delay=swap_delay)

    def delay_for(self, kind: DelayKind) -> float:
        return self.swap_delay if kind is DelayKind.SWAP else self.compare_delay

    def delay_ms(self, kind: DelayKind) -> int:
        return int(round(self.delay_for(kind) * 1000))

    async def __call__(self, kind: DelayKind) -> None:
        await asyncio.sleep(self.delay_for(kind))


async def no_delay(kind: DelayKind) -> None:
    await asyncio.sleep(0)

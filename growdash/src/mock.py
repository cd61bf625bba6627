"""
Synthetic sensor readings for mock mode and live-source fallback.

Each metric follows its own slow periodic curve (different period and phase)
plus a small bounded jitter, so consecutive readings look like a continuous
signal rather than independent noise. Soil and light are clamped to their
physical ranges.

The clock and random source are injected so tests can pin both.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import math
import random
import time
from collections.abc import Callable

from growdash.src.models import Reading

SOIL_RANGE: tuple[float, float] = (0.0, 100.0)
"""Valid soil moisture range in percent."""

LIGHT_RANGE: tuple[float, float] = (0.0, 2000.0)
"""Valid illuminance range in lux."""


def clamp(value: float, lo: float, hi: float) -> float:
    """Limit *value* to the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


def _now_ms() -> float:
    return time.time() * 1000.0


class MockGenerator:
    """Produces smooth, plausible synthetic readings.

    Args:
        rng: Random source for jitter. Defaults to a fresh ``random.Random``.
        clock_ms: Callable returning the current time in milliseconds.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock_ms: Callable[[], float] = _now_ms,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._clock_ms = clock_ms

    def _jitter(self, width: float) -> float:
        """Uniform noise in [-width/2, width/2)."""
        return (self._rng.random() - 0.5) * width

    def generate(self, now_ms: float | None = None) -> Reading:
        """Return a synthetic reading for *now_ms* (default: the clock)."""
        now = self._clock_ms() if now_ms is None else now_ms

        temperature = 18 + 10 * math.sin(now / 60000) + self._jitter(0.8)
        humidity = 45 + 20 * math.cos(now / 45000) + self._jitter(1.4)
        soil = 35 + 35 * math.sin(now / 90000) + self._jitter(3)
        light = 120 + 200 * abs(math.sin(now / 30000)) + self._jitter(20)

        return Reading(
            temperature=round(temperature, 1),
            humidity=round(humidity, 1),
            soil=round(clamp(soil, *SOIL_RANGE)),
            light=round(clamp(light, *LIGHT_RANGE)),
        )

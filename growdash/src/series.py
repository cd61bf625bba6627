"""
Fixed-capacity rolling window for one metric.

Backed by ``collections.deque(maxlen=capacity)``: appending to a full window
drops the oldest value first, so the window never grows past its capacity
and stays in chronological order. A new window is pre-filled with ``None``
placeholders, which renderers draw as gaps while the chart settles.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

DEFAULT_CAPACITY: int = 40
"""Default window width, matching the line charts of the dashboard."""


class RollingSeries:
    """FIFO buffer holding the most recent values of one metric.

    Args:
        capacity: Maximum number of values kept (>= 1).
        seed: Initial contents; defaults to ``capacity`` placeholders.

    Raises:
        ValueError: If *capacity* is less than 1.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        seed: Iterable[float | None] | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1 (got {capacity})")
        self._capacity = capacity
        initial = [None] * capacity if seed is None else seed
        self._values: deque[float | None] = deque(initial, maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def latest(self) -> float | None:
        """Most recently pushed value (None if empty or a gap)."""
        return self._values[-1] if self._values else None

    def push(self, value: float | None) -> None:
        """Append *value*, evicting the oldest value when full."""
        self._values.append(value)

    def snapshot(self) -> list[float | None]:
        """Return the current contents, oldest first, without mutating."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RollingSeries(capacity={self._capacity}, len={len(self)})"

"""
Poll controller: owns the repeating schedule and the update pipeline.

Two states, ``IDLE`` and ``POLLING``. The schedule is a single asyncio task
(the timer) that spawns one poll every ``poll_interval_ms``. Restarting
always cancels the old timer before creating the new one, so changing the
interval or the source never leaves two timers running.

Each poll runs:

1. ``SampleSource.fetch_one(config)`` -> SampleOutcome (never raises).
2. Push each metric into its RollingSeries.
3. ``AdvisoryEngine.evaluate(reading)``.
4. ``renderer.render(frame)``.

Scheduled polls run as their own tasks so a slow fetch never delays the
schedule. Buffer pushes happen synchronously after the fetch returns, on the
one event loop, so they never interleave; the last poll to finish wins the
display. A failing poll is logged and the timer keeps running.

CHANGELOG:
- 2026-10-19: Track out-of-band polls so shutdown can cancel them (STORY-009)
- 2026-10-19: Initial creation (STORY-009)

TODO:
- None
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from growdash.src.models import METRICS
from growdash.src.renderer import DEFAULT_TIPS_DISPLAY_LIMIT, build_frame
from growdash.src.series import DEFAULT_CAPACITY, RollingSeries

if TYPE_CHECKING:
    from growdash.src.advisory import AdvisoryEngine
    from growdash.src.config import PollConfig
    from growdash.src.models import DashboardFrame
    from growdash.src.renderer import Renderer
    from growdash.src.source import SampleSource

logger = logging.getLogger(__name__)

TIMER_TASK_NAME: str = "growdash-poll-timer"
"""Name of the repeating timer task (one at most per controller)."""


class PollState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"


class PollController:
    """Drives the fetch -> buffer -> advise -> render pipeline.

    Args:
        config: Poll configuration owned by this controller.
        source: Sample source used on every poll.
        engine: Advisory engine applied to every reading.
        renderer: Receives one DashboardFrame per poll.
        series_capacity: Rolling window width per metric.
        tips_display_limit: Max tips placed in ``frame.display_tips``.
    """

    def __init__(
        self,
        *,
        config: PollConfig,
        source: SampleSource,
        engine: AdvisoryEngine,
        renderer: Renderer,
        series_capacity: int = DEFAULT_CAPACITY,
        tips_display_limit: int = DEFAULT_TIPS_DISPLAY_LIMIT,
    ) -> None:
        self._config = config
        self._source = source
        self._engine = engine
        self._renderer = renderer
        self._tips_display_limit = tips_display_limit
        self._series: dict[str, RollingSeries] = {
            metric: RollingSeries(series_capacity) for metric in METRICS
        }
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[Any]] = set()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> PollConfig:
        return self._config

    @property
    def state(self) -> PollState:
        if self._timer is not None and not self._timer.done():
            return PollState.POLLING
        return PollState.IDLE

    @property
    def series(self) -> Mapping[str, RollingSeries]:
        return self._series

    # ------------------------------------------------------------------
    # Schedule control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """(Re)start polling at the configured interval.

        Cancels any existing timer first, then schedules a new one and one
        immediate poll so the first data does not wait a full interval.
        Must be called from inside a running event loop.
        """
        self._cancel_timer()
        interval_s = self._config.poll_interval_s
        self._timer = asyncio.create_task(
            self._run_timer(interval_s),
            name=TIMER_TASK_NAME,
        )
        logger.info(
            "Polling started (interval=%dms, use_mock=%s, endpoint=%s)",
            self._config.poll_interval_ms,
            self._config.use_mock,
            self._config.endpoint_url or "<none>",
        )
        self._spawn(self._safe_poll())

    def stop(self) -> None:
        """Cancel the timer if present."""
        if self._cancel_timer():
            logger.info("Polling stopped")

    def set_interval(self, interval_ms: int) -> None:
        """Change the poll interval; restarts the timer if polling.

        Raises:
            pydantic.ValidationError: If *interval_ms* is not > 0.
        """
        self._config.poll_interval_ms = interval_ms
        if self.state is PollState.POLLING:
            self.start()

    def set_use_mock(self, use_mock: bool) -> None:
        """Toggle mock mode; restarts the timer if polling."""
        self._config.use_mock = use_mock
        if self.state is PollState.POLLING:
            self.start()

    def apply(self, *, endpoint_url: str, use_mock: bool) -> None:
        """Apply endpoint and mock settings together, then (re)start polling."""
        self._config.endpoint_url = endpoint_url
        self._config.use_mock = use_mock
        self.start()

    async def aclose(self) -> None:
        """Stop polling and wait for the timer and in-flight polls to finish."""
        timer = self._timer
        self.stop()
        pending = [t for t in self._inflight if not t.done()]
        for task in pending:
            task.cancel()
        if timer is not None:
            pending.append(timer)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def poll_once(self) -> DashboardFrame:
        """Run one fetch -> buffer -> advise -> render cycle.

        Independent of the schedule: does not reset or affect the timer.

        Returns:
            The frame handed to the renderer.
        """
        outcome = await self._source.fetch_one(self._config)
        reading = outcome.reading

        for metric, series in self._series.items():
            series.push(reading.value(metric))

        advisory = self._engine.evaluate(reading)
        frame = build_frame(
            outcome,
            self._series,
            advisory,
            tips_display_limit=self._tips_display_limit,
        )
        self._renderer.render(frame)
        logger.debug("Poll complete (origin=%s)", outcome.origin.value)
        return frame

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _run_timer(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            self._spawn(self._safe_poll())

    async def _safe_poll(self) -> None:
        """Scheduled poll: log errors instead of propagating them."""
        try:
            await self.poll_once()
        except Exception:
            logger.error("Poll cycle error", exc_info=True)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def _cancel_timer(self) -> bool:
        """Cancel the current timer. Returns True if one was running."""
        timer, self._timer = self._timer, None
        if timer is None or timer.done():
            return False
        timer.cancel()
        return True

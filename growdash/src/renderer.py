"""
Renderer collaborators and frame assembly.

The pipeline never touches presentation primitives. After each poll it
builds a :class:`~growdash.src.models.DashboardFrame` (readouts, rolling
window snapshots, gauge values, advice, fallback notice) and passes it to a
renderer. Two renderers ship here:

- ``LogRenderer``: logs the headline and readouts (headless daemon).
- ``FrameStore``: keeps the latest frame for the HTTP API. Last writer wins.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-008)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

from growdash.src.models import METRICS, DashboardFrame

if TYPE_CHECKING:
    from growdash.src.models import AdvisoryResult, SampleOutcome
    from growdash.src.series import RollingSeries

logger = logging.getLogger(__name__)

UNITS: dict[str, str] = {
    "temperature": "°C",
    "humidity": "%",
    "soil": "%",
    "light": "lx",
}

UNKNOWN: str = "--"
"""Readout shown for a missing metric."""

DEFAULT_TIPS_DISPLAY_LIMIT: int = 4


class Renderer(Protocol):
    """Anything that can present a dashboard frame."""

    def render(self, frame: DashboardFrame) -> None: ...


# ---------------------------------------------------------------------------
# Frame assembly
# ---------------------------------------------------------------------------


def format_readout(value: float | None, unit: str) -> str:
    """Format a metric for display, ``--`` when unknown."""
    if value is None:
        return UNKNOWN
    if float(value).is_integer():
        return f"{int(value)} {unit}"
    return f"{value} {unit}"


def fallback_notice(outcome: SampleOutcome) -> str | None:
    """User-facing notice when a live fetch fell back to mock values."""
    if not outcome.is_fallback or outcome.reason is None:
        return None
    return f"Live sensor unavailable ({outcome.reason.value}) — using mock values."


def build_frame(
    outcome: SampleOutcome,
    series: Mapping[str, RollingSeries],
    advisory: AdvisoryResult,
    *,
    tips_display_limit: int = DEFAULT_TIPS_DISPLAY_LIMIT,
) -> DashboardFrame:
    """Assemble the renderer input for one poll."""
    reading = outcome.reading
    gauges: dict[str, list[float]] = {}
    if reading.soil is not None:
        gauges["soil"] = [reading.soil, max(0.0, 100.0 - reading.soil)]
    if reading.light is not None:
        gauges["light"] = [reading.light]

    return DashboardFrame(
        ts=outcome.ts,
        origin=outcome.origin,
        reason=outcome.reason,
        notice=fallback_notice(outcome),
        readouts={m: format_readout(reading.value(m), UNITS[m]) for m in METRICS},
        series={name: s.snapshot() for name, s in series.items()},
        gauges=gauges,
        advisory=advisory,
        display_tips=advisory.top(tips_display_limit),
        extras=reading.extras,
    )


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


class LogRenderer:
    """Renders frames to the log."""

    def render(self, frame: DashboardFrame) -> None:
        readouts = ", ".join(f"{k}={v}" for k, v in frame.readouts.items())
        logger.info(
            "[%s] %s | %s", frame.origin.value, frame.advisory.headline, readouts
        )
        if frame.notice:
            logger.warning(frame.notice)
        for tip in frame.display_tips[1:]:
            logger.info("tip: %s", tip)


class FrameStore:
    """Keeps the most recent frame and a count of rendered frames."""

    def __init__(self) -> None:
        self._latest: DashboardFrame | None = None
        self._count: int = 0

    @property
    def latest(self) -> DashboardFrame | None:
        return self._latest

    @property
    def count(self) -> int:
        return self._count

    def render(self, frame: DashboardFrame) -> None:
        self._latest = frame
        self._count += 1

"""
Pydantic models for sensor readings, poll outcomes, and advisory results.

A Reading carries the four dashboard metrics plus any extension fields the
sensor sends (nutrient, water level, ...). Missing metrics are ``None`` and
render as "unknown"; they are never an error.

SampleOutcome is the typed result of one fetch: it says whether the reading
is live, mock by choice, or mock because the live source failed (and why),
so callers never have to string-match log or advisory text.

CHANGELOG:
- 2026-10-19: Reject NaN and infinite metric values (STORY-012)
- 2026-10-19: Add DashboardFrame for renderer hand-off (STORY-006)
- 2026-10-19: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

METRICS: tuple[str, ...] = ("temperature", "humidity", "soil", "light")
"""Required metric names, in display order."""


class Reading(BaseModel):
    """One snapshot of plant sensor values.

    Attributes:
        temperature: Air temperature in degrees Celsius.
        humidity: Relative humidity in percent.
        soil: Soil moisture in percent (0-100).
        light: Illuminance in lux.

    Metric values must be finite; NaN and infinities fail validation.
    """

    model_config = ConfigDict(extra="allow", allow_inf_nan=False)

    temperature: float | None = None
    humidity: float | None = None
    soil: float | None = None
    light: float | None = None

    @property
    def extras(self) -> dict[str, Any]:
        """Extension fields passed through from the sensor payload."""
        return dict(self.model_extra or {})

    def value(self, metric: str) -> Any:
        """Return the value of a metric or extension field, or None."""
        if metric in METRICS:
            return getattr(self, metric)
        return self.extras.get(metric)


class SampleOrigin(StrEnum):
    """Where a reading came from."""

    LIVE = "live"
    MOCK = "mock"
    FALLBACK = "fallback"


class FallbackReason(StrEnum):
    """Why a live fetch was replaced by a mock reading."""

    NO_ENDPOINT = "no_endpoint"
    INVALID_URL = "invalid_url"
    NETWORK_ERROR = "network_error"
    BAD_STATUS = "bad_status"
    MALFORMED_BODY = "malformed_body"


class SampleOutcome(BaseModel):
    """Result of a single SampleSource fetch.

    Attributes:
        reading: The reading to display (always usable).
        origin: live, mock (configured), or fallback (live source failed).
        reason: Set only when origin is fallback.
        detail: Human-readable cause of the fallback, for logs and notices.
        ts: UTC time the reading was produced.
    """

    reading: Reading
    origin: SampleOrigin
    reason: FallbackReason | None = None
    detail: str | None = None
    ts: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def is_live(self) -> bool:
        return self.origin is SampleOrigin.LIVE

    @property
    def is_fallback(self) -> bool:
        return self.origin is SampleOrigin.FALLBACK


class AdvisoryResult(BaseModel):
    """Advice derived from one reading.

    Attributes:
        headline: First triggered tip, or the all-nominal sentence.
        tips: Unique actionable tips in triggering order (unbounded).
        confirmations: Triggered "ok" notes, e.g. "Soil moisture healthy."
    """

    model_config = ConfigDict(frozen=True)

    headline: str
    tips: tuple[str, ...] = ()
    confirmations: tuple[str, ...] = ()

    def top(self, n: int) -> list[str]:
        """Return at most *n* tips for display."""
        return list(self.tips[: max(n, 0)])


class DashboardFrame(BaseModel):
    """Everything a renderer needs for one dashboard update.

    Attributes:
        ts: Time of the underlying reading.
        origin: Origin of the reading.
        reason: Fallback reason, if any.
        notice: User-facing notice when live data is unavailable.
        readouts: Metric name to formatted value ("--" when unknown).
        series: Metric name to rolling window snapshot (oldest first).
        gauges: Soil as ``[soil, remaining]``, light as ``[light]``.
        advisory: Full advisory result.
        display_tips: Advisory tips capped at the display limit.
        extras: Extension fields from the reading.
    """

    ts: datetime
    origin: SampleOrigin
    reason: FallbackReason | None = None
    notice: str | None = None
    readouts: dict[str, str]
    series: dict[str, list[float | None]]
    gauges: dict[str, list[float]]
    advisory: AdvisoryResult
    display_tips: list[str]
    extras: dict[str, Any] = Field(default_factory=dict)

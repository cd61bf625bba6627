"""
Unit tests for frame assembly and the bundled renderers.

Tests verify:
- Readouts use units and show ``--`` for unknown metrics.
- Soil and light gauges mirror the doughnut and bar charts.
- Fallback outcomes carry a notice; live and mock outcomes do not.
- display_tips is capped at the display limit.
- FrameStore keeps the latest frame; LogRenderer logs headline and notice.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-008)

TODO:
- None
"""

import logging

import pytest
from growdash.src.advisory import AdvisoryEngine
from growdash.src.models import FallbackReason, Reading, SampleOrigin, SampleOutcome
from growdash.src.renderer import (
    UNKNOWN,
    FrameStore,
    LogRenderer,
    build_frame,
    fallback_notice,
    format_readout,
)
from growdash.src.series import RollingSeries


def _series() -> dict[str, RollingSeries]:
    return {m: RollingSeries(3) for m in ("temperature", "humidity", "soil", "light")}


class TestFormatReadout:
    @pytest.mark.parametrize(
        ("value", "unit", "expected"),
        [
            (None, "°C", UNKNOWN),
            (22.5, "°C", "22.5 °C"),
            (60.0, "%", "60 %"),
            (0.0, "lx", "0 lx"),
        ],
    )
    def test_format(self, value: float | None, unit: str, expected: str) -> None:
        assert format_readout(value, unit) == expected


class TestFallbackNotice:
    def test_notice_only_for_fallback(self) -> None:
        live = SampleOutcome(reading=Reading(), origin=SampleOrigin.LIVE)
        mock = SampleOutcome(reading=Reading(), origin=SampleOrigin.MOCK)
        fallback = SampleOutcome(
            reading=Reading(),
            origin=SampleOrigin.FALLBACK,
            reason=FallbackReason.BAD_STATUS,
        )
        assert fallback_notice(live) is None
        assert fallback_notice(mock) is None
        notice = fallback_notice(fallback)
        assert notice is not None
        assert "bad_status" in notice
        assert "using mock values" in notice


class TestBuildFrame:
    def test_frame_contents(self, stressed_reading: Reading) -> None:
        series = _series()
        for name, s in series.items():
            s.push(stressed_reading.value(name))
        outcome = SampleOutcome(reading=stressed_reading, origin=SampleOrigin.MOCK)
        advisory = AdvisoryEngine().evaluate(stressed_reading)

        frame = build_frame(outcome, series, advisory, tips_display_limit=2)

        assert frame.origin is SampleOrigin.MOCK
        assert frame.notice is None
        assert frame.readouts == {
            "temperature": "32 °C",
            "humidity": "35 %",
            "soil": "20 %",
            "light": "100 lx",
        }
        assert frame.series["soil"] == [None, None, 20.0]
        assert frame.gauges == {"soil": [20.0, 80.0], "light": [100.0]}
        assert len(frame.advisory.tips) == 4
        assert frame.display_tips == list(advisory.tips[:2])

    def test_unknown_metrics(self) -> None:
        reading = Reading.model_validate({"temperature": 20, "nutrient": 2})
        outcome = SampleOutcome(reading=reading, origin=SampleOrigin.LIVE)
        frame = build_frame(outcome, _series(), AdvisoryEngine().evaluate(reading))

        assert frame.readouts["soil"] == UNKNOWN
        assert frame.readouts["light"] == UNKNOWN
        assert frame.gauges == {}
        assert frame.extras == {"nutrient": 2}

    def test_soil_gauge_never_negative(self) -> None:
        reading = Reading(soil=130)
        outcome = SampleOutcome(reading=reading, origin=SampleOrigin.LIVE)
        frame = build_frame(outcome, _series(), AdvisoryEngine().evaluate(reading))
        assert frame.gauges["soil"] == [130.0, 0.0]


class TestRenderers:
    def _frame(self, origin: SampleOrigin, reason: FallbackReason | None = None):
        reading = Reading(temperature=32, humidity=35, soil=20, light=100)
        outcome = SampleOutcome(reading=reading, origin=origin, reason=reason)
        return build_frame(outcome, _series(), AdvisoryEngine().evaluate(reading))

    def test_frame_store_keeps_latest(self) -> None:
        store = FrameStore()
        assert store.latest is None
        first = self._frame(SampleOrigin.MOCK)
        second = self._frame(SampleOrigin.LIVE)

        store.render(first)
        store.render(second)

        assert store.latest is second
        assert store.count == 2

    def test_log_renderer(self, caplog: pytest.LogCaptureFixture) -> None:
        frame = self._frame(SampleOrigin.FALLBACK, FallbackReason.NETWORK_ERROR)

        with caplog.at_level(logging.INFO, logger="growdash.src.renderer"):
            LogRenderer().render(frame)

        assert frame.advisory.headline in caplog.text
        assert "soil=20 %" in caplog.text
        assert any(
            r.levelno == logging.WARNING and "using mock values" in r.getMessage()
            for r in caplog.records
        )

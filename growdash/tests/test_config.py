"""
Unit tests for dashboard configuration (DashboardSettings, PollConfig).

Tests verify:
- Defaults apply when no GROWDASH_* variables are set.
- Values load from environment variables.
- Interval must be one of the offered choices.
- Numeric constraints are enforced.
- PollConfig validates assignment and trims the endpoint.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

import pytest
from growdash.src.config import DashboardSettings, PollConfig
from pydantic import ValidationError


class TestDashboardSettingsDefaults:
    """Settings load with sensible defaults."""

    def test_defaults(self) -> None:
        settings = DashboardSettings()

        assert settings.use_mock is True
        assert settings.endpoint_url == ""
        assert settings.poll_interval_ms == 5000
        assert settings.interval_choices_ms == [2000, 5000, 10000, 30000]
        assert settings.series_capacity == 40
        assert settings.tips_display_limit == 4
        assert settings.request_timeout_s == 5.0
        assert settings.rules_path == ""
        assert settings.autostart is True
        assert settings.log_level == "INFO"


class TestDashboardSettingsLoadsFromEnv:
    """Settings read GROWDASH_* environment variables."""

    def test_loads_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GROWDASH_USE_MOCK", "false")
        monkeypatch.setenv("GROWDASH_ENDPOINT_URL", "  http://192.168.4.1/sensor  ")
        monkeypatch.setenv("GROWDASH_POLL_INTERVAL_MS", "1000")
        monkeypatch.setenv("GROWDASH_INTERVAL_CHOICES_MS", "[1000, 5000]")
        monkeypatch.setenv("GROWDASH_SERIES_CAPACITY", "12")
        monkeypatch.setenv("GROWDASH_LOG_LEVEL", "debug")

        settings = DashboardSettings()

        assert settings.use_mock is False
        assert settings.endpoint_url == "http://192.168.4.1/sensor"
        assert settings.poll_interval_ms == 1000
        assert settings.interval_choices_ms == [1000, 5000]
        assert settings.series_capacity == 12
        assert settings.log_level == "DEBUG"

    def test_reads_dotenv_file(self, tmp_path) -> None:
        """A .env file in the working directory is honoured."""
        (tmp_path / ".env").write_text("GROWDASH_USE_MOCK=false\n")

        assert DashboardSettings().use_mock is False


class TestDashboardSettingsValidation:
    """Invalid settings are rejected at startup."""

    def test_interval_not_in_choices_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GROWDASH_POLL_INTERVAL_MS", "1234")

        with pytest.raises(ValidationError) as exc_info:
            DashboardSettings()
        assert "GROWDASH_POLL_INTERVAL_MS" in str(exc_info.value)

    def test_non_positive_choice_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DashboardSettings(interval_choices_ms=[0, 5000])

    def test_empty_choices_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DashboardSettings(interval_choices_ms=[])

    def test_choices_sorted_and_deduplicated(self) -> None:
        settings = DashboardSettings(interval_choices_ms=[10000, 5000, 5000])
        assert settings.interval_choices_ms == [5000, 10000]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("series_capacity", 0),
            ("tips_display_limit", 0),
            ("request_timeout_s", 0),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_values_rejected(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            DashboardSettings(**{field: value})


class TestPollConfig:
    """PollConfig is validated on construction and assignment."""

    def test_defaults(self) -> None:
        config = PollConfig()
        assert config.use_mock is True
        assert config.endpoint_url == ""
        assert config.poll_interval_ms == 5000
        assert config.poll_interval_s == 5.0

    def test_from_settings(self) -> None:
        settings = DashboardSettings(
            use_mock=False,
            endpoint_url="http://sensor.local/data",
            poll_interval_ms=2000,
        )
        config = PollConfig.from_settings(settings)

        assert config.use_mock is False
        assert config.endpoint_url == "http://sensor.local/data"
        assert config.poll_interval_ms == 2000

    def test_endpoint_trimmed_on_assignment(self) -> None:
        config = PollConfig()
        config.endpoint_url = "  http://sensor.local  "
        assert config.endpoint_url == "http://sensor.local"

    @pytest.mark.parametrize("interval", [0, -1000])
    def test_non_positive_interval_rejected(self, interval: int) -> None:
        config = PollConfig()
        with pytest.raises(ValidationError):
            config.poll_interval_ms = interval
        assert config.poll_interval_ms == 5000

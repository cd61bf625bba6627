"""
Dashboard configuration.

Two layers:

- ``DashboardSettings`` (Pydantic BaseSettings): startup knobs loaded from
  ``GROWDASH_*`` environment variables or a ``.env`` file. Read once.
- ``PollConfig``: the mutable runtime state (mock flag, endpoint, interval)
  owned by the PollController and changed only through its setters.
  Assignment is validated, so an invalid interval never reaches the timer.

CHANGELOG:
- 2026-10-19: Add rules_path and autostart (STORY-007)
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INTERVAL_CHOICES_MS: list[int] = [2000, 5000, 10000, 30000]


class DashboardSettings(BaseSettings):
    """Startup configuration for the grow dashboard.

    Attributes:
        use_mock: Start in mock mode (default True).
        endpoint_url: Sensor endpoint returning a JSON reading. Empty means
            no live sensor is configured.
        poll_interval_ms: Initial poll interval; must be one of
            ``interval_choices_ms``.
        interval_choices_ms: Poll intervals offered to the user.
        series_capacity: Rolling window width per metric.
        tips_display_limit: Max advisory tips shown in a frame.
        request_timeout_s: Timeout for the sensor GET request.
        rules_path: Optional JSON file overriding the advisory rule table.
        autostart: Start polling when the API app starts.
        log_level: Root log level for the daemon.
    """

    model_config = SettingsConfigDict(
        env_prefix="GROWDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    use_mock: bool = True
    endpoint_url: str = ""
    poll_interval_ms: int = 5000
    interval_choices_ms: list[int] = Field(
        default_factory=lambda: list(DEFAULT_INTERVAL_CHOICES_MS)
    )
    series_capacity: int = 40
    tips_display_limit: int = 4
    request_timeout_s: float = 5.0
    rules_path: str = ""
    autostart: bool = True
    log_level: str = "INFO"

    @field_validator("endpoint_url")
    @classmethod
    def endpoint_url_stripped(cls, v: str) -> str:
        """Trim surrounding whitespace from the endpoint URL."""
        return v.strip()

    @field_validator("interval_choices_ms")
    @classmethod
    def interval_choices_must_be_positive(cls, v: list[int]) -> list[int]:
        """Validate the interval menu is non-empty and strictly positive."""
        if not v:
            raise ValueError("GROWDASH_INTERVAL_CHOICES_MS must not be empty")
        if any(ms <= 0 for ms in v):
            raise ValueError("GROWDASH_INTERVAL_CHOICES_MS values must be > 0")
        return sorted(set(v))

    @field_validator("series_capacity")
    @classmethod
    def series_capacity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("GROWDASH_SERIES_CAPACITY must be >= 1")
        return v

    @field_validator("tips_display_limit")
    @classmethod
    def tips_display_limit_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("GROWDASH_TIPS_DISPLAY_LIMIT must be >= 1")
        return v

    @field_validator("request_timeout_s")
    @classmethod
    def request_timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("GROWDASH_REQUEST_TIMEOUT_S must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate the log level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"GROWDASH_LOG_LEVEL must be a logging level (got: '{v}')")
        return level

    @model_validator(mode="after")
    def poll_interval_must_be_a_choice(self) -> "DashboardSettings":
        """The initial interval must be one of the offered choices."""
        if self.poll_interval_ms not in self.interval_choices_ms:
            raise ValueError(
                f"GROWDASH_POLL_INTERVAL_MS={self.poll_interval_ms} is not one of "
                f"{self.interval_choices_ms}"
            )
        return self


class PollConfig(BaseModel):
    """Mutable poll configuration owned by the PollController.

    Attributes:
        use_mock: Generate synthetic readings instead of fetching.
        endpoint_url: Sensor endpoint URL (trimmed; empty means unset).
        poll_interval_ms: Milliseconds between scheduled polls (> 0).
    """

    model_config = ConfigDict(validate_assignment=True)

    use_mock: bool = True
    endpoint_url: str = ""
    poll_interval_ms: int = Field(default=5000, gt=0)

    @field_validator("endpoint_url")
    @classmethod
    def endpoint_url_stripped(cls, v: str) -> str:
        return v.strip()

    @property
    def poll_interval_s(self) -> float:
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_settings(cls, settings: DashboardSettings) -> "PollConfig":
        """Seed the runtime config from startup settings."""
        return cls(
            use_mock=settings.use_mock,
            endpoint_url=settings.endpoint_url,
            poll_interval_ms=settings.poll_interval_ms,
        )

"""
Headless grow dashboard daemon.

Builds the polling pipeline with a LogRenderer, starts the repeating poll,
and runs until SIGTERM/SIGINT. Each poll logs the headline advice and the
readouts; live-source fallbacks are logged as warnings. On shutdown the timer
is cancelled and in-flight polls are awaited.

Structured JSON logging is used for all events.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-011)

TODO:
- None
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from growdash.src.renderer import LogRenderer

if TYPE_CHECKING:
    from growdash.src.controller import PollController

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the dashboard daemon.

    Sets up the root logger with a JSON-formatted handler writing to stderr.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry, ensure_ascii=False)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Startup config logging
# ---------------------------------------------------------------------------


def log_config_summary(settings: object) -> None:
    """Log a config summary at startup.

    Args:
        settings: A DashboardSettings instance (or any object with the same attrs).
    """
    logger.info(
        "Grow dashboard starting with config: "
        "use_mock=%s, endpoint_url=%s, poll_interval_ms=%s, "
        "interval_choices_ms=%s, series_capacity=%s, "
        "tips_display_limit=%s, request_timeout_s=%s, rules_path=%s",
        settings.use_mock,  # type: ignore[union-attr]
        settings.endpoint_url or "<none>",  # type: ignore[union-attr]
        settings.poll_interval_ms,  # type: ignore[union-attr]
        settings.interval_choices_ms,  # type: ignore[union-attr]
        settings.series_capacity,  # type: ignore[union-attr]
        settings.tips_display_limit,  # type: ignore[union-attr]
        settings.request_timeout_s,  # type: ignore[union-attr]
        settings.rules_path or "<built-in>",  # type: ignore[union-attr]
    )


# ---------------------------------------------------------------------------
# Runner with graceful shutdown
# ---------------------------------------------------------------------------


async def run_until_shutdown(
    controller: PollController,
    shutdown_event: asyncio.Event,
) -> None:
    """Start polling and block until *shutdown_event* is set.

    Args:
        controller: The poll controller to drive.
        shutdown_event: Event to signal graceful shutdown.
    """
    controller.start()
    await shutdown_event.wait()
    logger.info("Stopping poll controller")
    await controller.aclose()
    logger.info("Shutdown complete")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


async def async_main() -> None:
    """Async entrypoint: load config, build components, run until signalled.

    Sets up SIGTERM/SIGINT handlers to trigger graceful shutdown.
    """
    from growdash.src.advisory import build_engine
    from growdash.src.config import DashboardSettings, PollConfig
    from growdash.src.controller import PollController
    from growdash.src.source import SampleSource

    settings = DashboardSettings()
    configure_logging(settings.log_level)
    log_config_summary(settings)

    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda: _handle_signal(shutdown_event),
        )

    controller = PollController(
        config=PollConfig.from_settings(settings),
        source=SampleSource(timeout_s=settings.request_timeout_s),
        engine=build_engine(settings.rules_path),
        renderer=LogRenderer(),
        series_capacity=settings.series_capacity,
        tips_display_limit=settings.tips_display_limit,
    )

    await run_until_shutdown(controller, shutdown_event)


def _handle_signal(shutdown_event: asyncio.Event) -> None:
    """Handle SIGTERM/SIGINT by setting the shutdown event.

    Args:
        shutdown_event: The event to set for graceful shutdown.
    """
    logger.info("Received shutdown signal, initiating graceful shutdown")
    shutdown_event.set()


def main() -> None:
    """Synchronous entrypoint for the dashboard daemon."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()

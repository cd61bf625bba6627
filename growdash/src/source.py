"""
Sensor sample source: live HTTP fetch with mock fallback.

``SampleSource.fetch_one(config)`` always returns a usable SampleOutcome:

- mock mode -> synthetic reading (origin ``mock``).
- live mode without an endpoint -> synthetic reading (origin ``fallback``,
  reason ``no_endpoint``).
- live mode with an endpoint -> one uncached GET. Any transport error,
  non-2xx status, or malformed body resolves to a synthetic reading with the
  matching fallback reason. Never raises to the caller.

A consecutive-failure counter is kept for logging so a flapping sensor shows
up in the logs; it resets on the first successful live fetch.

CHANGELOG:
- 2026-10-19: Treat over-nested JSON bodies as malformed (STORY-012)
- 2026-10-19: Map invalid URLs to their own fallback reason (STORY-004)
- 2026-10-19: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from growdash.src.mock import MockGenerator
from growdash.src.models import FallbackReason, Reading, SampleOrigin, SampleOutcome

if TYPE_CHECKING:
    from growdash.src.config import PollConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TIMEOUT_S: float = 5.0
"""Timeout for the sensor GET request in seconds."""

_NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "application/json",
}


class _MalformedBody(ValueError):
    """Response body is not a JSON object compatible with Reading."""


# ---------------------------------------------------------------------------
# Body parsing
# ---------------------------------------------------------------------------


def parse_reading(payload: Any) -> Reading:
    """Convert a decoded JSON payload into a Reading.

    Missing metrics become ``None``; extra fields are passed through.

    Raises:
        _MalformedBody: If the payload is not an object or a metric is
            not numeric.
    """
    if not isinstance(payload, dict):
        raise _MalformedBody(
            f"expected a JSON object, got {type(payload).__name__}"
        )
    try:
        return Reading.model_validate(payload)
    except ValidationError as exc:
        raise _MalformedBody(
            f"{exc.error_count()} invalid field(s): "
            + ", ".join(str(err["loc"][0]) for err in exc.errors())
        ) from exc


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------


class SampleSource:
    """Produces one reading per call, live or synthetic.

    Args:
        generator: Mock generator used for mock mode and fallbacks.
        timeout_s: Timeout for the sensor GET request.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        generator: MockGenerator | None = None,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        self._generator = generator if generator is not None else MockGenerator()
        self._timeout_s = timeout_s
        self._transport = transport
        self._consecutive_failures: int = 0

    @property
    def consecutive_failures(self) -> int:
        """Number of live fetches that have failed in a row."""
        return self._consecutive_failures

    async def fetch_one(self, config: PollConfig) -> SampleOutcome:
        """Fetch one reading according to *config*; never raises."""
        if config.use_mock:
            return SampleOutcome(
                reading=self._generator.generate(),
                origin=SampleOrigin.MOCK,
            )

        if not config.endpoint_url:
            logger.warning("No endpoint set, falling back to mock values")
            return self._fallback(FallbackReason.NO_ENDPOINT, "no endpoint configured")

        try:
            reading = await self._get(config.endpoint_url)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            return self._failed(FallbackReason.INVALID_URL, config.endpoint_url, exc)
        except httpx.HTTPStatusError as exc:
            return self._failed(FallbackReason.BAD_STATUS, config.endpoint_url, exc)
        except httpx.HTTPError as exc:
            return self._failed(FallbackReason.NETWORK_ERROR, config.endpoint_url, exc)
        except ValueError as exc:
            # json.JSONDecodeError and _MalformedBody both land here.
            return self._failed(FallbackReason.MALFORMED_BODY, config.endpoint_url, exc)

        if self._consecutive_failures:
            logger.info(
                "Sensor endpoint recovered after %d failed fetch(es)",
                self._consecutive_failures,
            )
        self._consecutive_failures = 0
        logger.debug("Live reading fetched from %s", config.endpoint_url)
        return SampleOutcome(reading=reading, origin=SampleOrigin.LIVE)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, url: str) -> Reading:
        """GET *url* and parse the body into a Reading."""
        if httpx.URL(url).scheme not in ("http", "https"):
            raise httpx.UnsupportedProtocol(
                f"Sensor URL must start with http:// or https:// (got: '{url}')"
            )
        async with httpx.AsyncClient(
            timeout=self._timeout_s,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=_NO_CACHE_HEADERS)
            response.raise_for_status()
            try:
                payload = response.json()
            except RecursionError as exc:
                raise _MalformedBody("JSON body nested too deeply") from exc
            return parse_reading(payload)

    def _failed(
        self,
        reason: FallbackReason,
        url: str,
        exc: Exception,
    ) -> SampleOutcome:
        self._consecutive_failures += 1
        logger.warning(
            "Sensor fetch from %s failed (%s: %s), using mock values "
            "(consecutive failures: %d)",
            url,
            reason.value,
            exc,
            self._consecutive_failures,
        )
        return self._fallback(reason, str(exc))

    def _fallback(self, reason: FallbackReason, detail: str) -> SampleOutcome:
        return SampleOutcome(
            reading=self._generator.generate(),
            origin=SampleOrigin.FALLBACK,
            reason=reason,
            detail=detail,
        )

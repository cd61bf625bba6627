"""
Dashboard routes: latest frame, configuration surface, manual poll.

Endpoints:
- GET  /v1/frame             latest rendered frame (503 before the first poll)
- POST /v1/poll              manual fetch; returns the new frame
- GET  /v1/config            current poll config, state, interval choices
- PUT  /v1/config            apply endpoint URL + mock flag, restart polling
- PUT  /v1/config/mock       toggle mock mode (restarts if polling)
- PUT  /v1/config/interval   change interval (must be an offered choice)
- POST /v1/polling/start     start or restart polling
- POST /v1/polling/stop      stop polling

CHANGELOG:
- 2026-10-19: Initial creation (STORY-010)

TODO:
- None
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from growdash.src.api.deps import Controller, Frames, Settings
from growdash.src.models import DashboardFrame

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["dashboard"])


# ---------------------------------------------------------------------------
# Request / response bodies
# ---------------------------------------------------------------------------


class ConfigUpdate(BaseModel):
    endpoint_url: str = ""
    use_mock: bool = True


class MockToggle(BaseModel):
    use_mock: bool


class IntervalUpdate(BaseModel):
    poll_interval_ms: int


class ConfigView(BaseModel):
    use_mock: bool
    endpoint_url: str
    poll_interval_ms: int
    interval_choices_ms: list[int]
    state: str


def _config_view(controller: Controller, settings: Settings) -> ConfigView:
    config = controller.config
    return ConfigView(
        use_mock=config.use_mock,
        endpoint_url=config.endpoint_url,
        poll_interval_ms=config.poll_interval_ms,
        interval_choices_ms=settings.interval_choices_ms,
        state=controller.state.value,
    )


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


@router.get("/frame")
async def latest_frame(frames: Frames) -> DashboardFrame:
    """Return the most recently rendered frame.

    Raises:
        HTTPException: 503 if no poll has completed yet.
    """
    frame = frames.latest
    if frame is None:
        raise HTTPException(status_code=503, detail="No data yet.")
    return frame


@router.post("/poll")
async def manual_poll(controller: Controller) -> DashboardFrame:
    """Run one poll now, outside the schedule, and return its frame."""
    return await controller.poll_once()


# ---------------------------------------------------------------------------
# Configuration surface
# ---------------------------------------------------------------------------


@router.get("/config")
async def get_config(controller: Controller, settings: Settings) -> ConfigView:
    return _config_view(controller, settings)


@router.put("/config")
async def apply_config(
    body: ConfigUpdate,
    controller: Controller,
    settings: Settings,
) -> ConfigView:
    """Apply endpoint URL and mock flag together, then restart polling."""
    controller.apply(endpoint_url=body.endpoint_url, use_mock=body.use_mock)
    logger.info(
        "Config applied: endpoint=%s use_mock=%s",
        controller.config.endpoint_url or "<none>",
        body.use_mock,
    )
    return _config_view(controller, settings)


@router.put("/config/mock")
async def toggle_mock(
    body: MockToggle,
    controller: Controller,
    settings: Settings,
) -> ConfigView:
    controller.set_use_mock(body.use_mock)
    return _config_view(controller, settings)


@router.put("/config/interval")
async def set_interval(
    body: IntervalUpdate,
    controller: Controller,
    settings: Settings,
) -> ConfigView:
    """Change the poll interval.

    Raises:
        HTTPException: 422 if the interval is not one of the offered choices.
    """
    if body.poll_interval_ms not in settings.interval_choices_ms:
        raise HTTPException(
            status_code=422,
            detail=(
                f"poll_interval_ms must be one of {settings.interval_choices_ms}"
            ),
        )
    controller.set_interval(body.poll_interval_ms)
    return _config_view(controller, settings)


@router.post("/polling/start")
async def start_polling(controller: Controller, settings: Settings) -> ConfigView:
    controller.start()
    return _config_view(controller, settings)


@router.post("/polling/stop")
async def stop_polling(controller: Controller, settings: Settings) -> ConfigView:
    controller.stop()
    return _config_view(controller, settings)

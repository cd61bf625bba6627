"""
FastAPI application entry point for the grow dashboard API.

``create_app()`` is the application factory. The lifespan loads
DashboardSettings, builds the pipeline (mock generator, sample source,
advisory engine, frame store, poll controller), stores it on ``app.state``
and starts polling when ``autostart`` is set. Shutdown stops the timer and
waits for in-flight polls.

Serve with any ASGI server, e.g. ``uvicorn growdash.src.api.main:app``.

CHANGELOG:
- 2026-10-19: Allow injecting settings and source for tests (STORY-010)
- 2026-10-19: Initial creation (STORY-010)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from growdash.src.advisory import build_engine
from growdash.src.api.dashboard import router as dashboard_router
from growdash.src.api.health import router as health_router
from growdash.src.config import DashboardSettings, PollConfig
from growdash.src.controller import PollController
from growdash.src.renderer import FrameStore
from growdash.src.source import SampleSource

logger = logging.getLogger(__name__)


def create_app(
    settings: DashboardSettings | None = None,
    source: SampleSource | None = None,
) -> FastAPI:
    """Create the dashboard API.

    Args:
        settings: Startup settings. Loaded from the environment at startup
            when omitted.
        source: Sample source. Built from settings when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan: build and start the pipeline, stop on exit."""
        resolved = settings if settings is not None else DashboardSettings()
        frames = FrameStore()
        controller = PollController(
            config=PollConfig.from_settings(resolved),
            source=source or SampleSource(timeout_s=resolved.request_timeout_s),
            engine=build_engine(resolved.rules_path),
            renderer=frames,
            series_capacity=resolved.series_capacity,
            tips_display_limit=resolved.tips_display_limit,
        )
        app.state.settings = resolved
        app.state.frames = frames
        app.state.controller = controller

        if resolved.autostart:
            controller.start()
        logger.info("Grow dashboard API ready (polling=%s)", controller.state.value)
        yield
        await controller.aclose()
        logger.info("Grow dashboard API shutting down")

    app = FastAPI(
        title="Grow Dashboard API",
        description="Plant sensor readings, rolling charts, and cultivation advice.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT", "POST"],
        allow_headers=["Content-Type"],
    )

    app.include_router(health_router)
    app.include_router(dashboard_router)

    @app.get("/")
    async def root() -> dict:
        """Root status endpoint."""
        return {"status": "ok"}

    return app


app = create_app()

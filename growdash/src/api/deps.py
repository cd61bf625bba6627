"""
FastAPI dependency injection providers.

The application lifespan stores the settings, poll controller, and frame
store on ``app.state``; these providers hand them to route handlers via
``Depends()``.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-010)
"""

from typing import Annotated

from fastapi import Depends, Request

from growdash.src.config import DashboardSettings
from growdash.src.controller import PollController
from growdash.src.renderer import FrameStore


def get_settings(request: Request) -> DashboardSettings:
    return request.app.state.settings


def get_controller(request: Request) -> PollController:
    return request.app.state.controller


def get_frame_store(request: Request) -> FrameStore:
    return request.app.state.frames


# Type aliases for injection in route handlers:
#   async def my_route(controller: Controller):
#       controller.start()
Settings = Annotated[DashboardSettings, Depends(get_settings)]
Controller = Annotated[PollController, Depends(get_controller)]
Frames = Annotated[FrameStore, Depends(get_frame_store)]

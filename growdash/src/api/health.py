"""
Health check endpoint for the dashboard API.

Provides a simple GET /health endpoint that returns
{"status": "ok", "polling": "<idle|polling>"} with HTTP 200. Intended for
container HEALTHCHECK and local monitoring.

CHANGELOG:
- 2026-10-19: Document the polling field in the response (STORY-012)
- 2026-10-19: Report poll state alongside status (STORY-010)
- 2026-10-19: Initial creation (STORY-010)

TODO:
- None
"""

from fastapi import APIRouter

from growdash.src.api.deps import Controller

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(controller: Controller) -> dict[str, str]:
    """Return a simple health status.

    Returns:
        dict: ``{"status": "ok", "polling": "<idle|polling>"}``.
    """
    return {"status": "ok", "polling": controller.state.value}

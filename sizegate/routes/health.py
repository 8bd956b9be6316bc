"""Health check endpoints for liveness and readiness probes."""

import logging

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

log = logging.getLogger("uvicorn.error")


@router.get("/health", summary="Liveness probe")
def health() -> dict[str, str]:
    """Liveness probe: simple uptime check. Always returns 200 if service is running."""
    log.debug("Liveness check")
    return {"status": "alive"}


@router.get("/ready", summary="Readiness probe")
def readiness(request: Request) -> dict:
    """Readiness probe: reports the Content-Length limit the gate enforces.

    Returns:
        {"status": "ready", "content_length_limit": <int>, "limit_enabled": <bool>}
    """
    log.debug("Readiness check requested.")
    limit = request.app.state.size_limit.content_length_limit
    return {
        "status": "ready",
        "content_length_limit": limit,
        "limit_enabled": limit > 0,
    }

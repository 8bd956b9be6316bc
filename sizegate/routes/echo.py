"""Echo endpoint: accepts any body and reports what was received."""

import logging

from fastapi import APIRouter, Request

router = APIRouter(tags=["echo"])
log = logging.getLogger("uvicorn.error")


@router.post("/echo", summary="Report the size of the request body")
async def echo(request: Request) -> dict:
    """Read the full body and return its size and content type."""
    body = await request.body()
    log.debug("Echo received %d bytes", len(body))
    return {
        "status": "ok",
        "received_bytes": len(body),
        "content_type": request.headers.get("content-type"),
    }

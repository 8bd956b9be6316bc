"""Exception handlers for FastAPI app with concise JSON responses."""

import logging as pylog
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

log = pylog.getLogger("uvicorn.error")


def _error_response(request: Request, status: int, detail: Any, **extra) -> JSONResponse:
    req_id: Optional[str] = getattr(request.state, "request_id", None)
    content = {
        "error": {
            "status": status,
            "detail": detail,
            **extra,
            "path": request.url.path,
            "request_id": req_id,
        }
    }
    # Use jsonable_encoder to avoid bytes/non-serializable types breaking dumps
    return JSONResponse(
        status_code=status,
        content=jsonable_encoder(content),
        headers={"X-Request-ID": req_id} if req_id else None,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle Starlette HTTP exceptions uniformly."""
    # Optionally suppress noisy 404 logs from scans
    settings = getattr(request.app.state, "settings", None)
    suppress_404 = getattr(settings, "suppress_404_logs", False)

    if not (suppress_404 and exc.status_code == 404):
        log.warning(
            "HTTPException %s %s -> %s req_id=%s",
            request.method,
            request.url.path,
            exc.status_code,
            getattr(request.state, "request_id", None),
        )
    return _error_response(request, exc.status_code, exc.detail)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI validation errors with minimal noise."""
    # Do not log stack traces for validation errors; keep concise
    log.warning(
        "ValidationError %s %s -> 422 req_id=%s errors=%s",
        request.method,
        request.url.path,
        getattr(request.state, "request_id", None),
        exc.errors(),
    )
    return _error_response(
        request, 422, "Request validation failed", errors=exc.errors()
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected exceptions."""
    # Avoid stacktraces; summarize error type and request id
    log.error(
        "UnhandledError %s %s -> 500 err=%s req_id=%s",
        request.method,
        request.url.path,
        exc.__class__.__name__,
        getattr(request.state, "request_id", None),
    )
    return _error_response(request, 500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

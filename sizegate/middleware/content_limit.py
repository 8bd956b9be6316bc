"""Middleware to enforce a maximum Content-Length on incoming requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from ..schemas.problem import RejectionBody

log = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class SizeLimitConfig:
    """Global request size limit in bytes. Zero or negative disables the check."""

    content_length_limit: int = 0


# int() refuses decimal strings past the interpreter's digit limit (4300 by default)
_DIGIT_CHUNK = 1000


def _digits_to_int(digits: str) -> int:
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def declared_content_length(request: Request) -> Optional[int]:
    """Return the Content-Length the client declared, or None if there is none.

    Chunked requests carry no Content-Length. Anything other than plain ASCII
    digits (signs, underscores, whitespace) is treated the same way. Digit
    strings of any length are converted, so a huge declared size still counts.
    """
    cl = request.headers.get("content-length")
    if cl is None or not (cl.isascii() and cl.isdigit()):
        return None
    return _digits_to_int(cl)


def should_reject(config: Optional[SizeLimitConfig], declared_length: Optional[int]) -> bool:
    """Decide whether a request declaring ``declared_length`` bytes is refused."""
    if config is None:
        return False
    if config.content_length_limit <= 0:
        return False
    if declared_length is None:
        return False
    return declared_length > config.content_length_limit


class ContentLengthLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds the configured limit.

    The body is never read. Requests without a Content-Length header pass
    through untouched, as does everything when ``config`` is None or the
    limit is disabled.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Optional[SizeLimitConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app)
        self.config = config
        self.logger = logger or log

    def _reject(self, declared: str) -> JSONResponse:
        # Logged as the header text: str() of a huge int hits the same digit limit
        self.logger.warning(
            "Rejecting request with Content-Length %s more than allowed %d.",
            declared,
            self.config.content_length_limit,
        )
        return JSONResponse(
            status_code=413,
            content=RejectionBody().model_dump(),
            media_type="application/json",
        )

    async def dispatch(self, request: Request, call_next):
        """Short-circuit with 413 if the declared size is over the limit."""
        declared = declared_content_length(request)
        if should_reject(self.config, declared):
            return self._reject(request.headers["content-length"])
        return await call_next(request)


def use_content_length_restriction(app, config: Optional[SizeLimitConfig]):
    """Install the size gate on ``app`` ahead of its route handlers.

    Returns ``app`` so registration calls can be chained.
    """
    app.add_middleware(ContentLengthLimitMiddleware, config=config)
    return app

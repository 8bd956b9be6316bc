import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from fastapi import Request


def _extract_client_ip(request: Request, trust_forwarded_for: bool) -> Optional[str]:
    """Return best-effort client IP.

    If ``trust_forwarded_for`` is true and an ``X-Forwarded-For`` header is present,
    use its left-most value. Otherwise, fall back to the socket peer address.
    """
    if trust_forwarded_for:
        xff = request.headers.get("x-forwarded-for")
        if xff:
            # format: client, proxy1, proxy2 ... take left-most
            first = xff.split(",")[0].strip()
            if first:
                return first
    if request.client:
        return request.client.host
    return None


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, trust_forwarded_for: bool = True):
        super().__init__(app)
        self.trust_forwarded_for = trust_forwarded_for
        self.logger = logging.getLogger("uvicorn.error")

    def _log_request(self, *, method: str, route: str, status: int, duration_ms: int, client_ip: str, req_id: str) -> None:
        self.logger.info(
            "%s %s -> %s %dms ip=%s req_id=%s",
            method,
            route,
            status,
            duration_ms,
            client_ip,
            req_id,
        )

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        req_id = str(uuid.uuid4())

        client_ip = _extract_client_ip(request, self.trust_forwarded_for) or "-"
        method = request.method
        path = request.url.path

        # Attach request id to request.state for downstream handlers
        request.state.request_id = req_id

        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            status = response.status_code if response else 500
            route = getattr(request.scope.get("route"), "path", path)
            self._log_request(
                method=method,
                route=route,
                status=status,
                duration_ms=duration_ms,
                client_ip=client_ip,
                req_id=req_id,
            )
            if response is not None:
                response.headers["X-Request-ID"] = req_id
                response.headers["X-Process-Time"] = f"{duration_ms}ms"

"""Logging utilities: configure Uvicorn-compatible logs and startup banner."""

import logging as pylog
from typing import Optional, List

from fastapi.routing import APIRoute

from .version import __version__

# Use uvicorn.error logger (guaranteed to exist + colored in dev)
log = pylog.getLogger("uvicorn.error")

# Emitted by uvicorn for every malformed request line from scanners
INVALID_HTTP_WARNING = "Invalid HTTP request received."


# pylint: disable=too-few-public-methods
class _MessageFilter(pylog.Filter):
    def __init__(self, *, deny_contains: Optional[List[str]] = None):
        super().__init__()
        self.deny_contains = deny_contains or []

    def filter(self, record: pylog.LogRecord) -> bool:  # True -> keep
        msg = record.getMessage()
        for frag in self.deny_contains:
            if frag in msg:
                return False
        return True


def configure_logging(
    level: str,
    *,
    suppress_access_logs: bool = False,
    suppress_invalid_http_warnings: bool = True,
) -> None:
    """Apply ``level`` to the uvicorn loggers and install noise filters.

    Safe to call more than once; filters from earlier calls are replaced.
    """
    log.setLevel(level)
    for flt in [f for f in log.filters if isinstance(f, _MessageFilter)]:
        log.removeFilter(flt)
    if suppress_invalid_http_warnings:
        log.addFilter(_MessageFilter(deny_contains=[INVALID_HTTP_WARNING]))

    access = pylog.getLogger("uvicorn.access")
    access.disabled = suppress_access_logs
    if not suppress_access_logs:
        access.setLevel(level)


# pylint: disable=too-many-arguments
def log_startup_banner(
    *,
    host: Optional[str] = None,
    port: Optional[int] = None,
    content_length_limit: int = 0,
    environment: str = "local",
    version: str = __version__,
) -> None:
    """Log the startup banner with configuration details."""
    url = f"http://{host}:{port}"
    if content_length_limit > 0:
        limit = f"{content_length_limit} bytes"
    else:
        limit = "disabled"

    ruler = "═" * 60

    banner = f"""
{ruler}
        SizeGate v{version}

        Listening → {url}
        Environment → {environment}
        Content-Length limit → {limit}
{ruler}
    """

    for line in banner.strip().splitlines():
        log.info(line)


def log_endpoints(app) -> None:
    """Log all registered APIRoute endpoints."""
    lines = []
    for route in getattr(app, "routes", []):
        if isinstance(route, APIRoute):
            methods = sorted(
                m for m in (route.methods or []) if m not in {"HEAD", "OPTIONS"}
            )
            method_str = ",".join(methods) or "-"
            lines.append((route.path, method_str, route.name))

    lines.sort(key=lambda x: (x[0], x[1]))
    header = f"Available endpoints ({len(lines)}):"

    log.info("%s", header)
    for path, methods, name in lines:
        log.info("  %-7s %-40s (%s)", methods, path, name)

"""ASGI app factory and configuration for the SizeGate daemon."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from .config import get_settings
from .logging import log_startup_banner, log_endpoints, configure_logging
from .middleware.logging import LoggingMiddleware
from .middleware.content_limit import use_content_length_restriction
from .routes.health import router as health_router
from .routes.echo import router as echo_router
from .exception_handlers import register_exception_handlers
from .version import __version__

log = logging.getLogger("uvicorn.error")


def _please_die_gracefully(exc: ValidationError) -> None:
    """Log which settings are invalid and exit."""
    log.critical("SizeGate startup aborted: invalid settings")
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        log.critical("  SIZEGATE_%s: %s", field.upper(), err.get("msg"))
    sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app startup and shutdown events."""
    limit = app.state.size_limit.content_length_limit
    if limit > 0:
        log.info("SizeGate is ready; rejecting bodies over %d bytes", limit)
    else:
        log.warning("SizeGate is ready with the Content-Length limit disabled")

    yield

    log.info("SizeGate is shutting down.")


def create_daemon() -> FastAPI:
    """Create and configure the FastAPI app."""

    app = FastAPI(title="SizeGate", version=__version__, lifespan=lifespan)

    # Load settings and configure logging; provide clear error if env is invalid
    try:
        settings = get_settings()
    except ValidationError as exc:
        _please_die_gracefully(exc)

    configure_logging(
        settings.log_level,
        suppress_access_logs=settings.suppress_access_logs,
        suppress_invalid_http_warnings=settings.suppress_invalid_http_warnings,
    )

    size_limit = settings.size_limit()
    app.state.settings = settings
    app.state.size_limit = size_limit

    # Middleware added last runs first: the gate sits ahead of every route,
    # and request logging wraps the gate so rejections are logged too.
    use_content_length_restriction(app, size_limit)
    app.add_middleware(
        LoggingMiddleware, trust_forwarded_for=settings.trust_forwarded_for
    )
    register_exception_handlers(app)
    log.info(
        "App started env=%s content_length_limit=%d log_level=%s",
        settings.app_environment,
        size_limit.content_length_limit,
        settings.log_level,
    )

    log_startup_banner(
        host=settings.listen_host,
        port=settings.listen_port,
        content_length_limit=size_limit.content_length_limit,
        environment=settings.app_environment,
    )

    app.include_router(health_router)
    app.include_router(echo_router)

    log_endpoints(app)

    return app


# Expose ASGI app for uvicorn
app = create_daemon()

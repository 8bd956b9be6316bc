"""Module entrypoint: run the SizeGate FastAPI app with Uvicorn."""

import uvicorn

from .config import get_settings


def main() -> None:
    """Start Uvicorn pointing at the packaged ASGI app."""
    settings = get_settings()
    uvicorn.run(
        "sizegate.daemon:app",
        host=settings.listen_host,
        port=settings.listen_port or 8080,
    )


if __name__ == "__main__":
    main()

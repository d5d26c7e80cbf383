#!/usr/bin/env python3
"""Serve the board API with uvicorn."""

import sys

import logfire
import uvicorn

from board.config import Settings
from board.util.logging import setup_logging
from board.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve until stopped.

    Logfire is configured before uvicorn imports the app module so startup
    errors are reported too.
    """
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info("Starting board API", host=settings.host, port=settings.port)
    try:
        uvicorn.run(
            "board.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            # Pending push deliveries are drained in the lifespan shutdown
            timeout_graceful_shutdown=30,
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Logging configuration for command line entry points."""

import logging
import sys

from board.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for uvicorn and third-party libraries.

    Application events go through logfire; this only sets levels and format
    for libraries that log through the standard logging module.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # pywebpush talks to push services through requests/urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("pywebpush").setLevel(logging.WARNING)

    logging.getLogger("board").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

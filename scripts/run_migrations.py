#!/usr/bin/env python3
"""Apply Alembic migrations before the API starts.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f6c2a9d41b7
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from board.config import Settings
from board.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the given revision (head by default)."""
    settings = Settings()
    configure_logfire(settings, service_name="board-migrations")
    revision = argv[0] if argv else "head"

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # A failed migration must stop the deploy before the API starts
            raise

    logfire.info("Database migrations applied", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

#!/usr/bin/env python3
"""Run periodic cleanup: old notifications, rate limit events, delivery logs.

Meant to be scheduled (cron, systemd timer) rather than run by the API.
All deletions happen in one transaction.
"""

import asyncio
import sys

import logfire

from board.application.usecase.maintenance import (
    RunMaintenanceRequest,
    RunMaintenanceUseCase,
)
from board.config import Settings
from board.util.di.container import create_container
from board.util.logging import setup_logging
from board.util.observability import configure_logfire


async def run() -> None:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(RunMaintenanceUseCase)
            result = await use_case.execute(RunMaintenanceRequest())
        logfire.info(
            "Maintenance completed",
            notifications_deleted=result.notifications_deleted,
            rate_limit_events_deleted=result.rate_limit_events_deleted,
            delivery_log_entries_deleted=result.delivery_log_entries_deleted,
        )
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings, service_name="board-maintenance")
    setup_logging(settings)

    try:
        asyncio.run(run())
        return 0
    except Exception as e:
        logfire.error(
            "Maintenance failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

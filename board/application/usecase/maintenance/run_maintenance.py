"""Run maintenance use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import NotificationService, PushDeliveryWorker, RateLimiter


class RunMaintenanceRequest(BaseModel):
    """Run maintenance request.

    Retention overrides fall back to the configured values.
    """

    notification_retention_days: Optional[int] = None
    delivery_log_retention_days: Optional[int] = None


class RunMaintenanceResponse(BaseModel):
    """Run maintenance response."""

    notifications_deleted: int
    rate_limit_events_deleted: int
    delivery_log_entries_deleted: int


class RunMaintenanceUseCase(
    BaseUseCase[RunMaintenanceRequest, RunMaintenanceResponse]
):
    """Use case for periodic cleanup of derived and expired rows."""

    def __init__(
        self,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        push_delivery_worker: PushDeliveryWorker,
    ) -> None:
        """Initialize run maintenance use case.

        Args:
            notification_service: Notification dispatcher
            rate_limiter: Per-actor rate limiter
            push_delivery_worker: Push delivery worker (owns the delivery log)
        """
        self.notification_service = notification_service
        self.rate_limiter = rate_limiter
        self.push_delivery_worker = push_delivery_worker

    async def execute(self, request: RunMaintenanceRequest) -> RunMaintenanceResponse:
        """Execute maintenance.

        Steps:
        1. Hard-delete old read notifications
        2. Prune rate limit events outside the window
        3. Prune old delivery log entries
        """
        with logfire.span("maintenance.run"):
            notifications = await self.notification_service.cleanup_old(
                request.notification_retention_days
            )
            events = await self.rate_limiter.prune()
            log_entries = await self.push_delivery_worker.prune_log(
                request.delivery_log_retention_days
            )
            return RunMaintenanceResponse(
                notifications_deleted=notifications,
                rate_limit_events_deleted=events,
                delivery_log_entries_deleted=log_entries,
            )

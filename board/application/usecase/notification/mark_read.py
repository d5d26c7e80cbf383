"""Mark notification read use cases."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.view import NotificationView
from board.domain.service import NotificationService
from board.domain.value import ActorId, NotificationId


class MarkReadRequest(BaseModel):
    """Mark read request."""

    actor_id: str
    notification_id: str  # UUID string


class MarkReadResponse(BaseModel):
    """Mark read response."""

    notification: NotificationView


class MarkReadUseCase:
    """Use case for marking one notification read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: MarkReadRequest) -> MarkReadResponse:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the notification does not exist
            AuthorizationError: If it belongs to another actor
        """
        notification = await self.notification_service.mark_read(
            ActorId(UUID(request.actor_id)),
            NotificationId(UUID(request.notification_id)),
        )
        return MarkReadResponse(
            notification=NotificationView.from_notification(notification)
        )


class MarkAllReadRequest(BaseModel):
    """Mark all read request."""

    actor_id: str


class MarkAllReadResponse(BaseModel):
    """Mark all read response."""

    updated: int


class MarkAllReadUseCase:
    """Use case for marking every unread notification read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: MarkAllReadRequest) -> MarkAllReadResponse:
        updated = await self.notification_service.mark_all_read(
            ActorId(UUID(request.actor_id))
        )
        return MarkAllReadResponse(updated=updated)

"""List notifications use case."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.view import NotificationView
from board.domain.service import NotificationService
from board.domain.value import ActorId


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    actor_id: str  # Actor ID from the session token
    limit: Optional[int] = None
    offset: int = 0
    unread_only: bool = False


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: List[NotificationView]
    unread_count: int


class ListNotificationsUseCase:
    """Use case for reading the actor's notifications, newest first."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Raises:
            ValidationError: If limit or offset is out of range
        """
        actor_id = ActorId(UUID(request.actor_id))
        notifications = await self.notification_service.get_notifications(
            actor_id,
            limit=request.limit,
            offset=request.offset,
            unread_only=request.unread_only,
        )
        unread_count = await self.notification_service.count_unread(actor_id)
        return ListNotificationsResponse(
            notifications=[NotificationView.from_notification(n) for n in notifications],
            unread_count=unread_count,
        )

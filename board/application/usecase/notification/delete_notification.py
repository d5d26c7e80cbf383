"""Delete notification use case."""

from uuid import UUID

from pydantic import BaseModel

from board.domain.service import NotificationService
from board.domain.value import ActorId, NotificationId


class DeleteNotificationRequest(BaseModel):
    """Delete notification request."""

    actor_id: str
    notification_id: str  # UUID string


class DeleteNotificationUseCase:
    """Use case for dismissing a notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: DeleteNotificationRequest) -> None:
        """Execute delete notification flow.

        Raises:
            NotFoundError: If the notification does not exist
            AuthorizationError: If it belongs to another actor
        """
        await self.notification_service.delete_notification(
            ActorId(UUID(request.actor_id)),
            NotificationId(UUID(request.notification_id)),
        )

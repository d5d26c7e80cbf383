"""Get unread count use case."""

from uuid import UUID

from pydantic import BaseModel

from board.domain.service import NotificationService
from board.domain.value import ActorId


class GetUnreadCountRequest(BaseModel):
    """Get unread count request."""

    actor_id: str


class GetUnreadCountResponse(BaseModel):
    """Get unread count response."""

    unread_count: int


class GetUnreadCountUseCase:
    """Use case for the notification badge count."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetUnreadCountRequest) -> GetUnreadCountResponse:
        count = await self.notification_service.count_unread(
            ActorId(UUID(request.actor_id))
        )
        return GetUnreadCountResponse(unread_count=count)

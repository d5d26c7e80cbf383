"""Get current actor use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from board.domain.service import ActorService
from board.domain.value import ActorId, Line


class GetCurrentActorRequest(BaseModel):
    """Get current actor request."""

    actor_id: str  # Actor ID from the session token


class GetCurrentActorResponse(BaseModel):
    """Get current actor response."""

    actor_id: str
    line: Line
    is_admin: bool
    posts_today: int
    last_post_at: Optional[datetime]
    last_seen_at: datetime
    created_at: datetime


class GetCurrentActorUseCase:
    """Use case for reading the authenticated actor."""

    def __init__(self, actor_service: ActorService) -> None:
        self.actor_service = actor_service

    async def execute(self, request: GetCurrentActorRequest) -> GetCurrentActorResponse:
        """Execute get current actor flow.

        Raises:
            NotFoundError: If the actor no longer exists
        """
        actor = await self.actor_service.get_actor(ActorId(UUID(request.actor_id)))
        return GetCurrentActorResponse(
            actor_id=str(actor.id),
            line=actor.line,
            is_admin=actor.is_admin,
            posts_today=actor.posts_today,
            last_post_at=actor.last_post_at,
            last_seen_at=actor.last_seen_at,
            created_at=actor.created_at,
        )

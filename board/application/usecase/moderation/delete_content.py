"""Delete content use case."""

from uuid import UUID

from pydantic import BaseModel

from board.domain.service import ActorService, ModerationGate
from board.domain.value import ActorId, VotableType


class DeleteContentRequest(BaseModel):
    """Delete content request."""

    actor_id: str  # Actor ID from the session token
    votable_type: VotableType
    votable_id: str  # UUID string


class DeleteContentResponse(BaseModel):
    """Delete content response."""

    votable_type: VotableType
    votable_id: str
    already_deleted: bool


class DeleteContentUseCase:
    """Use case for deleting a post or comment by its author or an admin."""

    def __init__(
        self, actor_service: ActorService, moderation_gate: ModerationGate
    ) -> None:
        self.actor_service = actor_service
        self.moderation_gate = moderation_gate

    async def execute(self, request: DeleteContentRequest) -> DeleteContentResponse:
        """Execute delete content flow.

        Admin rights are read from the stored actor, never from the token.

        Raises:
            NotFoundError: If the actor or item does not exist
            AuthorizationError: If the actor is neither the author nor an admin
        """
        actor = await self.actor_service.get_actor(ActorId(UUID(request.actor_id)))
        before = await self.moderation_gate.delete_content(
            actor, request.votable_type, UUID(request.votable_id)
        )
        await self.actor_service.touch(actor)

        return DeleteContentResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            already_deleted=before.is_deleted,
        )

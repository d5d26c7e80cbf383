"""Bootstrap session use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from board.domain.service import ActorService, JWTService
from board.domain.value import Line


class BootstrapSessionRequest(BaseModel):
    """Bootstrap session request."""

    device_id: str
    line: Optional[Line] = None  # Only honored for a new actor


class BootstrapSessionResponse(BaseModel):
    """Bootstrap session response."""

    actor_id: str
    line: Line
    is_admin: bool
    created: bool
    created_at: datetime
    token: str


class BootstrapSessionUseCase:
    """Use case for binding a device to an actor and issuing a session."""

    def __init__(self, actor_service: ActorService, jwt_service: JWTService) -> None:
        """Initialize bootstrap session use case.

        Args:
            actor_service: Actor domain service
            jwt_service: JWT token domain service
        """
        self.actor_service = actor_service
        self.jwt_service = jwt_service

    async def execute(self, request: BootstrapSessionRequest) -> BootstrapSessionResponse:
        """Execute bootstrap flow.

        Steps:
        1. Find the actor bound to the device, or create one
        2. Issue a session token for it

        Args:
            request: Bootstrap request

        Returns:
            The actor and its session token

        Raises:
            ValidationError: If the device id is invalid
        """
        actor, created = await self.actor_service.bootstrap(
            request.device_id, request.line
        )
        if not created:
            actor = await self.actor_service.touch(actor)

        return BootstrapSessionResponse(
            actor_id=str(actor.id),
            line=actor.line,
            is_admin=actor.is_admin,
            created=created,
            created_at=actor.created_at,
            token=self.jwt_service.create_token(actor),
        )

"""In-memory actor repository for testing."""

from typing import Optional

from board.domain.model.actor import Actor
from board.domain.repository.actor import ActorRepository
from board.domain.value import ActorId


class InMemoryActorRepository(ActorRepository):
    """In-memory implementation of ActorRepository for testing."""

    def __init__(self) -> None:
        self._actors: dict[ActorId, Actor] = {}

    async def find_by_id(self, actor_id: ActorId) -> Optional[Actor]:
        """Find an actor by ID."""
        return self._actors.get(actor_id)

    async def find_by_device_id(self, device_id: str) -> Optional[Actor]:
        """Find the actor bound to a device."""
        for actor in self._actors.values():
            if actor.device_id == device_id:
                return actor
        return None

    async def create_if_absent(self, actor: Actor) -> Actor:
        """Insert an actor unless its device is already bound."""
        existing = await self.find_by_device_id(actor.device_id)
        if existing:
            return existing
        self._actors[actor.id] = actor
        return actor

    async def save(self, actor: Actor) -> Actor:
        """Save an actor."""
        self._actors[actor.id] = actor
        return actor

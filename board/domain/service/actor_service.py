"""Actor domain service."""

import random
from typing import Optional
from uuid import uuid4

import logfire

from board.domain.error import NotFoundError, ValidationError
from board.domain.model.actor import Actor
from board.domain.repository import ActorRepository
from board.domain.value import ActorId, Line

from .base import Clock, Service, utcnow


class ActorService(Service):
    """Domain service for actor operations."""

    def __init__(self, actor_repository: ActorRepository, clock: Clock = utcnow) -> None:
        """Initialize actor service.

        Args:
            actor_repository: Actor repository
            clock: Source of the current time
        """
        self.actor_repository = actor_repository
        self.clock = clock

    async def bootstrap(
        self, device_id: str, line: Optional[Line] = None
    ) -> tuple[Actor, bool]:
        """Return the actor for a device, creating it on first contact.

        An existing actor keeps its line even if a different one is
        requested.

        Args:
            device_id: Opaque device identifier
            line: Requested line for a new actor (random if None)

        Returns:
            Tuple of (actor, created)

        Raises:
            ValidationError: If the device id is empty or too long
        """
        with logfire.span("actor_service.bootstrap"):
            if not device_id or len(device_id) > 255:
                raise ValidationError("Device ID must be 1-255 characters")

            existing = await self.actor_repository.find_by_device_id(device_id)
            if existing:
                return existing, False

            now = self.clock()
            candidate = Actor(
                id=ActorId(uuid4()),
                device_id=device_id,
                line=line or random.choice(list(Line)),
                last_seen_at=now,
                created_at=now,
            )
            actor = await self.actor_repository.create_if_absent(candidate)
            created = actor.id == candidate.id
            if created:
                logfire.info(
                    "Actor created", actor_id=str(actor.id), line=actor.line.value
                )
            return actor, created

    async def get_actor(self, actor_id: ActorId) -> Actor:
        """Get an actor by ID.

        Raises:
            NotFoundError: If the actor does not exist
        """
        actor = await self.actor_repository.find_by_id(actor_id)
        if not actor:
            raise NotFoundError("Actor", str(actor_id))
        return actor

    async def touch(self, actor: Actor) -> Actor:
        """Record activity by bumping last_seen_at."""
        return await self.actor_repository.save(
            actor.model_copy(update={"last_seen_at": self.clock()})
        )

    async def record_post(self, actor: Actor) -> Actor:
        """Count a new post against today's total.

        The counter restarts on the first post of a new (UTC) day.
        """
        now = self.clock()
        same_day = actor.last_post_at is not None and actor.last_post_at.date() == now.date()
        return await self.actor_repository.save(
            actor.model_copy(
                update={
                    "posts_today": actor.posts_today + 1 if same_day else 1,
                    "last_post_at": now,
                    "last_seen_at": now,
                }
            )
        )

"""PostgreSQL implementation of Actor repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Actor
from board.domain.repository import ActorRepository
from board.domain.value import ActorId
from board.persistence.mappers import actor_to_dict, row_to_actor
from board.persistence.tables import actors_table


class PostgresActorRepository(ActorRepository):
    """PostgreSQL implementation of ActorRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, actor_id: ActorId) -> Optional[Actor]:
        """Find an actor by ID."""
        stmt = select(actors_table).where(actors_table.c.id == actor_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_actor(row._asdict()) if row else None

    async def find_by_device_id(self, device_id: str) -> Optional[Actor]:
        """Find the actor bound to a device."""
        stmt = select(actors_table).where(actors_table.c.device_id == device_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_actor(row._asdict()) if row else None

    async def create_if_absent(self, actor: Actor) -> Actor:
        """Insert an actor, or return the one already bound to the device."""
        with logfire.span("actor_repository.create_if_absent", actor_id=str(actor.id)):
            stmt = (
                insert(actors_table)
                .values(**actor_to_dict(actor))
                .on_conflict_do_nothing(index_elements=["device_id"])
                .returning(actors_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()

            if row:
                return row_to_actor(row._asdict())

            # Lost the race to a concurrent bootstrap of the same device
            logfire.info("Actor already exists for device", actor_id=str(actor.id))
            existing = await self.find_by_device_id(actor.device_id)
            if existing is None:
                raise RuntimeError(f"Actor for device {actor.device_id} vanished")
            return existing

    async def save(self, actor: Actor) -> Actor:
        """Save an actor (create or update)."""
        actor_dict = actor_to_dict(actor)
        stmt = insert(actors_table).values(**actor_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={
                "is_admin": stmt.excluded.is_admin,
                "posts_today": stmt.excluded.posts_today,
                "last_post_at": stmt.excluded.last_post_at,
                "last_seen_at": stmt.excluded.last_seen_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return actor

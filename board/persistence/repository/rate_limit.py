"""PostgreSQL implementation of RateLimit repository."""

from datetime import datetime

import logfire
from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.repository import RateLimitRepository
from board.domain.value import ActorId, RateLimitKind
from board.persistence.tables import actors_table, rate_limit_events_table


class PostgresRateLimitRepository(RateLimitRepository):
    """PostgreSQL implementation of RateLimitRepository.

    Concurrent checks for one actor serialize on the actor row, so the
    count and the insert cannot interleave.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def count_since(
        self, actor_id: ActorId, kind: RateLimitKind, since: datetime
    ) -> int:
        """Count an actor's events of one kind in the window."""
        stmt = (
            select(func.count())
            .select_from(rate_limit_events_table)
            .where(
                rate_limit_events_table.c.actor_id == actor_id,
                rate_limit_events_table.c.kind == kind.value,
                rate_limit_events_table.c.created_at >= since,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def record_if_below(
        self,
        actor_id: ActorId,
        kind: RateLimitKind,
        since: datetime,
        at: datetime,
        limit: int,
    ) -> bool:
        """Lock the actor, count the window, then record the event."""
        lock_stmt = (
            select(actors_table.c.id)
            .where(actors_table.c.id == actor_id)
            .with_for_update()
        )
        await self.session.execute(lock_stmt)

        if await self.count_since(actor_id, kind, since) >= limit:
            return False

        stmt = insert(rate_limit_events_table).values(
            actor_id=actor_id, kind=kind.value, created_at=at
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return True

    async def delete_before(self, cutoff: datetime) -> int:
        """Delete events older than cutoff."""
        stmt = delete(rate_limit_events_table).where(
            rate_limit_events_table.c.created_at < cutoff
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        deleted = result.rowcount  # type: ignore[attr-defined]
        logfire.debug("Rate limit events pruned", count=deleted)
        return deleted

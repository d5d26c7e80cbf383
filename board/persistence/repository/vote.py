"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Vote
from board.domain.repository import VoteRepository
from board.domain.value import ActorId, VotableType
from board.persistence.mappers import row_to_vote, vote_to_dict
from board.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find an actor's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.actor_id == actor_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote, or overwrite the value of the existing one."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        stmt = stmt.on_conflict_do_update(
            constraint="uq_votes_actor_votable",
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(votes_table)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict())  # type: ignore[union-attr]

    async def delete_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Delete a vote by actor and votable."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.actor_id == actor_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> Tuple[int, int]:
        """Sum and count all votes on an item."""
        stmt = select(
            func.coalesce(func.sum(votes_table.c.value), 0),
            func.count(),
        ).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        total, count = result.one()
        return int(total), int(count)

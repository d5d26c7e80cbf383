"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Comment
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, DeletionReason, PostId
from board.persistence.mappers import comment_to_dict, row_to_comment
from board.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def lock(self, comment_id: CommentId) -> Optional[Comment]:
        """Load a comment with SELECT ... FOR UPDATE."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> List[Comment]:
        """Find all comments on a post, oldest first."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)

        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted_at.is_(None))

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_score(
        self, comment_id: CommentId, score: int, vote_count: int
    ) -> None:
        """Persist a recomputed score and vote count."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(score=score, vote_count=vote_count)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def soft_delete(
        self, comment_id: CommentId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Soft-delete a comment unless it is already deleted."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(deleted_at=deleted_at, deletion_reason=reason.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Atomically increment reply_count by 1."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(reply_count=comments_table.c.reply_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

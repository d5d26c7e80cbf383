"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Collection, List, Optional

import logfire
from sqlalchemy import desc, insert, select, tuple_, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Post
from board.domain.repository.post import HotFeedKey, NewFeedKey, PostRepository
from board.domain.value import DeletionReason, Line, PostId
from board.persistence.mappers import post_to_dict, row_to_post
from board.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def lock(self, post_id: PostId) -> Optional[Post]:
        """Load a post with SELECT ... FOR UPDATE."""
        stmt = select(posts_table).where(posts_table.c.id == post_id).with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), line=post.line.value
        ):
            stmt = insert(posts_table).values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
            logfire.info("Post saved successfully", post_id=str(post.id))
            return post

    async def update_score(self, post_id: PostId, score: int, vote_count: int) -> None:
        """Persist a recomputed score and vote count."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(score=score, vote_count=vote_count)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def soft_delete(
        self, post_id: PostId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Soft-delete a post unless it is already deleted."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .where(posts_table.c.deleted_at.is_(None))
            .values(deleted_at=deleted_at, deletion_reason=reason.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Atomically increment comment_count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=posts_table.c.comment_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_new(
        self,
        lines: Optional[Collection[Line]] = None,
        before: Optional[NewFeedKey] = None,
        limit: int = 20,
    ) -> List[Post]:
        """Find posts newest first, starting after a keyset position."""
        stmt = select(posts_table).where(posts_table.c.deleted_at.is_(None))

        if lines is not None:
            stmt = stmt.where(posts_table.c.line.in_([line.value for line in lines]))

        if before is not None:
            stmt = stmt.where(
                tuple_(posts_table.c.created_at, posts_table.c.id) < tuple_(*before)
            )

        stmt = stmt.order_by(
            desc(posts_table.c.created_at), desc(posts_table.c.id)
        ).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def find_hot(
        self,
        since: datetime,
        lines: Optional[Collection[Line]] = None,
        before: Optional[HotFeedKey] = None,
        limit: Optional[int] = 20,
    ) -> List[Post]:
        """Find recent posts by score, starting after a keyset position."""
        stmt = select(posts_table).where(
            posts_table.c.deleted_at.is_(None),
            posts_table.c.created_at >= since,
        )

        if lines is not None:
            stmt = stmt.where(posts_table.c.line.in_([line.value for line in lines]))

        if before is not None:
            stmt = stmt.where(
                tuple_(
                    posts_table.c.score, posts_table.c.created_at, posts_table.c.id
                )
                < tuple_(*before)
            )

        stmt = stmt.order_by(
            desc(posts_table.c.score),
            desc(posts_table.c.created_at),
            desc(posts_table.c.id),
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        posts = [row_to_post(row._asdict()) for row in result.fetchall()]
        logfire.debug("Hot posts fetched", count=len(posts))
        return posts

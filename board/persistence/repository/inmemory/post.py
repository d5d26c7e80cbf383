"""In-memory post repository for testing."""

from datetime import datetime
from typing import Collection, Optional

from board.domain.model.post import Post
from board.domain.repository.post import HotFeedKey, NewFeedKey, PostRepository
from board.domain.value import DeletionReason, Line, PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def lock(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID (no locking needed in a single event loop)."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def update_score(self, post_id: PostId, score: int, vote_count: int) -> None:
        """Persist a recomputed score and vote count."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"score": score, "vote_count": vote_count}
            )

    async def soft_delete(
        self, post_id: PostId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Soft-delete a post unless it is already deleted."""
        post = self._posts.get(post_id)
        if not post or post.deleted_at is not None:
            return False
        self._posts[post_id] = post.model_copy(
            update={"deleted_at": deleted_at, "deletion_reason": reason}
        )
        return True

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Increment comment_count by 1."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"comment_count": post.comment_count + 1}
            )

    def _visible(self, lines: Optional[Collection[Line]]) -> list[Post]:
        return [
            p
            for p in self._posts.values()
            if p.deleted_at is None and (lines is None or p.line in lines)
        ]

    async def find_new(
        self,
        lines: Optional[Collection[Line]] = None,
        before: Optional[NewFeedKey] = None,
        limit: int = 20,
    ) -> list[Post]:
        """Find posts newest first."""
        posts = self._visible(lines)
        if before is not None:
            posts = [p for p in posts if (p.created_at, p.id) < before]
        posts.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return posts[:limit]

    async def find_hot(
        self,
        since: datetime,
        lines: Optional[Collection[Line]] = None,
        before: Optional[HotFeedKey] = None,
        limit: Optional[int] = 20,
    ) -> list[Post]:
        """Find recent posts by score."""
        posts = [p for p in self._visible(lines) if p.created_at >= since]
        if before is not None:
            posts = [p for p in posts if (p.score, p.created_at, p.id) < before]
        posts.sort(key=lambda p: (p.score, p.created_at, p.id), reverse=True)
        return posts if limit is None else posts[:limit]

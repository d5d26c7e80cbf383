"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from board.domain.model.comment import Comment
from board.domain.value import CommentId, DeletionReason, PostId


class CommentRepository(ABC):
    """Storage for comments and their denormalized counters."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, soft-deleted or not."""
        pass

    @abstractmethod
    async def lock(self, comment_id: CommentId) -> Optional[Comment]:
        """Load a comment and hold its row lock until the transaction ends."""
        pass

    @abstractmethod
    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> List[Comment]:
        """All comments on a post ordered by created_at, then id.

        Threads are assembled from this flat list by the caller.
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def update_score(
        self, comment_id: CommentId, score: int, vote_count: int
    ) -> None:
        """Store a score and vote count computed from the vote ledger."""
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Mark a live comment deleted.

        Returns:
            False when the comment was already deleted or does not exist
        """
        pass

    @abstractmethod
    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Add one to reply_count without a read-modify-write."""
        pass

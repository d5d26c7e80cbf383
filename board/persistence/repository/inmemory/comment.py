"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from board.domain.model.comment import Comment
from board.domain.repository.comment import CommentRepository
from board.domain.value import CommentId, DeletionReason, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def lock(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        # Filter deleted
        if not include_deleted:
            comments = [c for c in comments if c.deleted_at is None]

        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_score(
        self, comment_id: CommentId, score: int, vote_count: int
    ) -> None:
        """Persist a recomputed score and vote count."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={"score": score, "vote_count": vote_count}
            )

    async def soft_delete(
        self, comment_id: CommentId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Soft-delete a comment unless it is already deleted."""
        comment = self._comments.get(comment_id)
        if not comment or comment.deleted_at is not None:
            return False
        self._comments[comment_id] = comment.model_copy(
            update={"deleted_at": deleted_at, "deletion_reason": reason}
        )
        return True

    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Increment reply_count by 1."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={"reply_count": comment.reply_count + 1}
            )

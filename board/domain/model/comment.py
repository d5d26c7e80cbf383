"""Comment entity.

Comments form two-level threads: a top-level comment (depth 0) may get
replies (depth 1), and replies cannot be replied to.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel
from board.domain.value import ActorId, CommentId, DeletionReason, Line, PostId

MAX_COMMENT_DEPTH = 1


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: 0 for top-level, 1 for replies
    """

    id: CommentId
    post_id: PostId
    author_id: ActorId
    line: Line
    content: str = Field(min_length=1, max_length=500)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0, le=MAX_COMMENT_DEPTH)
    score: int = 0
    vote_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None
    deletion_reason: Optional[DeletionReason] = None

    @model_validator(mode="after")
    def validate_threading(self) -> "Comment":
        """Top-level comments have no parent, replies have one."""
        if (self.parent_id is None) != (self.depth == 0):
            raise ValueError("Only replies have a parent comment")
        if (self.deleted_at is None) != (self.deletion_reason is None):
            raise ValueError("deleted_at and deletion_reason must be set together")
        return self

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been soft-deleted."""
        return self.deleted_at is not None

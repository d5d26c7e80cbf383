"""Post aggregate root.

Posts are short anonymous messages. The author's line is copied onto the
post at creation so feeds can filter without joining actors.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel
from board.domain.value import ActorId, DeletionReason, Line, PostId


class Post(DomainModel):
    """Post aggregate root.

    `score` is the sum of all vote values and `vote_count` the number of
    votes. Both are maintained by the score aggregator and never edited
    directly.
    """

    id: PostId
    author_id: ActorId
    line: Line
    content: str = Field(min_length=1, max_length=500)
    score: int = 0
    vote_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None
    deletion_reason: Optional[DeletionReason] = None

    @model_validator(mode="after")
    def validate_deletion(self) -> "Post":
        """Deletion timestamp and reason are set together."""
        if (self.deleted_at is None) != (self.deletion_reason is None):
            raise ValueError("deleted_at and deletion_reason must be set together")
        return self

    @property
    def is_deleted(self) -> bool:
        """Whether the post has been soft-deleted."""
        return self.deleted_at is not None

"""Notification entity.

Notifications snapshot the replying actor's line and a content preview at
creation time, so later reads need no joins and never change.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel
from board.domain.value import (
    ActorId,
    CommentId,
    Line,
    NotificationId,
    NotificationType,
    PostId,
)


class Notification(DomainModel):
    """Notification entity.

    Business rules:
    - read and read_at are set together
    - Milestones concern a post only and have no actor
    - Replies always record the replying actor
    """

    id: NotificationId
    recipient_id: ActorId
    type: NotificationType
    post_id: PostId
    comment_id: Optional[CommentId] = None
    actor_id: Optional[ActorId] = None
    actor_line: Optional[Line] = None
    preview: Optional[str] = Field(default=None, max_length=100)
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_consistency(self) -> "Notification":
        """Validate read state and type-specific fields."""
        if self.read != (self.read_at is not None):
            raise ValueError("read_at must be set exactly when read is true")
        if self.type.is_milestone:
            if self.actor_id is not None or self.comment_id is not None:
                raise ValueError("Milestone notifications have no actor or comment")
        elif self.actor_id is None or self.comment_id is None:
            raise ValueError("Reply notifications require an actor and a comment")
        return self

"""Read models shared by use case responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from board.domain.model import Comment, Notification, Post, PushSubscription
from board.domain.value import DeletionReason, Line, NotificationType


class PostView(BaseModel):
    """Post as returned to clients."""

    post_id: str
    line: Line
    content: str
    score: int
    vote_count: int
    comment_count: int
    created_at: datetime
    deleted: bool
    deletion_reason: Optional[DeletionReason] = None

    @classmethod
    def from_post(cls, post: Post) -> "PostView":
        return cls(
            post_id=str(post.id),
            line=post.line,
            content=post.content,
            score=post.score,
            vote_count=post.vote_count,
            comment_count=post.comment_count,
            created_at=post.created_at,
            deleted=post.is_deleted,
            deletion_reason=post.deletion_reason,
        )


class CommentView(BaseModel):
    """Comment as returned to clients."""

    comment_id: str
    post_id: str
    parent_id: Optional[str]
    depth: int
    line: Line
    content: str
    score: int
    vote_count: int
    reply_count: int
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentView":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            line=comment.line,
            content=comment.content,
            score=comment.score,
            vote_count=comment.vote_count,
            reply_count=comment.reply_count,
            created_at=comment.created_at,
        )


class NotificationView(BaseModel):
    """Notification as returned to its recipient."""

    notification_id: str
    type: NotificationType
    post_id: str
    comment_id: Optional[str]
    actor_line: Optional[Line]
    preview: Optional[str]
    read: bool
    created_at: datetime
    read_at: Optional[datetime]

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationView":
        return cls(
            notification_id=str(notification.id),
            type=notification.type,
            post_id=str(notification.post_id),
            comment_id=str(notification.comment_id) if notification.comment_id else None,
            actor_line=notification.actor_line,
            preview=notification.preview,
            read=notification.read,
            created_at=notification.created_at,
            read_at=notification.read_at,
        )


class PushSubscriptionView(BaseModel):
    """Push subscription without its encryption keys."""

    subscription_id: str
    device_id: str
    endpoint: str
    user_agent: Optional[str]
    enabled: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_subscription(cls, subscription: PushSubscription) -> "PushSubscriptionView":
        return cls(
            subscription_id=str(subscription.id),
            device_id=subscription.device_id,
            endpoint=subscription.endpoint,
            user_agent=subscription.user_agent,
            enabled=subscription.enabled,
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
        )

"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map rows by hand
instead of using SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from board.domain.model import (
    Actor,
    Comment,
    DeliveryLogEntry,
    Notification,
    Post,
    PushSubscription,
    Vote,
)
from board.domain.value import (
    ActorId,
    CommentId,
    DeletionReason,
    DeliveryLogId,
    DeliveryStatus,
    Line,
    NotificationId,
    NotificationType,
    PostId,
    PushSubscriptionId,
    VotableType,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return None if value is None else _uuid(value)


def row_to_actor(row: Dict[str, Any]) -> Actor:
    """Convert database row to Actor domain model.

    Args:
        row: Database row as dict

    Returns:
        Actor domain model
    """
    return Actor(
        id=ActorId(_uuid(row["id"])),
        device_id=row["device_id"],
        line=Line(row["line"]),
        is_admin=row["is_admin"],
        posts_today=row["posts_today"],
        last_post_at=row.get("last_post_at"),
        last_seen_at=row["last_seen_at"],
        created_at=row["created_at"],
    )


def actor_to_dict(actor: Actor) -> Dict[str, Any]:
    """Convert Actor domain model to database dict."""
    data = actor.model_dump()
    data["line"] = actor.line.value
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    reason = row.get("deletion_reason")
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=ActorId(_uuid(row["author_id"])),
        line=Line(row["line"]),
        content=row["content"],
        score=row["score"],
        vote_count=row["vote_count"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
        deletion_reason=DeletionReason(reason) if reason else None,
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    data = post.model_dump()
    data["line"] = post.line.value
    data["deletion_reason"] = post.deletion_reason.value if post.deletion_reason else None
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    reason = row.get("deletion_reason")
    parent_id = _optional_uuid(row.get("parent_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=ActorId(_uuid(row["author_id"])),
        line=Line(row["line"]),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=row["depth"],
        score=row["score"],
        vote_count=row["vote_count"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
        deletion_reason=DeletionReason(reason) if reason else None,
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    data = comment.model_dump()
    data["line"] = comment.line.value
    data["deletion_reason"] = (
        comment.deletion_reason.value if comment.deletion_reason else None
    )
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        actor_id=ActorId(_uuid(row["actor_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "actor_id": vote.actor_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "value": vote.value.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    comment_id = _optional_uuid(row.get("comment_id"))
    actor_id = _optional_uuid(row.get("actor_id"))
    actor_line = row.get("actor_line")
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=ActorId(_uuid(row["recipient_id"])),
        type=NotificationType(row["type"]),
        post_id=PostId(_uuid(row["post_id"])),
        comment_id=CommentId(comment_id) if comment_id else None,
        actor_id=ActorId(actor_id) if actor_id else None,
        actor_line=Line(actor_line) if actor_line else None,
        preview=row.get("preview"),
        read=row["read"],
        created_at=row["created_at"],
        read_at=row.get("read_at"),
        deleted_at=row.get("deleted_at"),
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    data["actor_line"] = notification.actor_line.value if notification.actor_line else None
    return data


def row_to_push_subscription(row: Dict[str, Any]) -> PushSubscription:
    """Convert database row to PushSubscription domain model."""
    return PushSubscription(
        id=PushSubscriptionId(_uuid(row["id"])),
        actor_id=ActorId(_uuid(row["actor_id"])),
        device_id=row["device_id"],
        endpoint=row["endpoint"],
        keys_p256dh=row["keys_p256dh"],
        keys_auth=row["keys_auth"],
        user_agent=row.get("user_agent"),
        enabled=row["enabled"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def push_subscription_to_dict(subscription: PushSubscription) -> Dict[str, Any]:
    """Convert PushSubscription domain model to database dict."""
    return subscription.model_dump()


def row_to_delivery_log_entry(row: Dict[str, Any]) -> DeliveryLogEntry:
    """Convert database row to DeliveryLogEntry domain model."""
    return DeliveryLogEntry(
        id=DeliveryLogId(_uuid(row["id"])),
        notification_id=NotificationId(_uuid(row["notification_id"])),
        recipient_id=ActorId(_uuid(row["recipient_id"])),
        subscription_id=PushSubscriptionId(_uuid(row["subscription_id"])),
        status=DeliveryStatus(row["status"]),
        status_code=row.get("status_code"),
        error=row.get("error"),
        created_at=row["created_at"],
    )


def delivery_log_entry_to_dict(entry: DeliveryLogEntry) -> Dict[str, Any]:
    """Convert DeliveryLogEntry domain model to database dict."""
    data = entry.model_dump()
    data["status"] = entry.status.value
    return data

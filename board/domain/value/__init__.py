"""Domain value objects for the board."""

from board.domain.value.identifiers import (
    ActorId,
    CommentId,
    DeliveryLogId,
    NotificationId,
    PostId,
    PushSubscriptionId,
    VoteId,
)
from board.domain.value.types import (
    Content,
    DeletionReason,
    DeliveryStatus,
    DeviceId,
    FeedKind,
    Line,
    LineGroup,
    NotificationType,
    PushEndpoint,
    PushKeys,
    RateLimitKind,
    VotableType,
    VoteValue,
)

__all__ = [
    # Identifiers
    "ActorId",
    "PostId",
    "CommentId",
    "VoteId",
    "NotificationId",
    "PushSubscriptionId",
    "DeliveryLogId",
    # Types
    "Content",
    "DeletionReason",
    "DeliveryStatus",
    "DeviceId",
    "FeedKind",
    "Line",
    "LineGroup",
    "NotificationType",
    "PushEndpoint",
    "PushKeys",
    "RateLimitKind",
    "VotableType",
    "VoteValue",
]

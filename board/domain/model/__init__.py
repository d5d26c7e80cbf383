"""Domain model entities for the board."""

from board.domain.model.actor import Actor
from board.domain.model.comment import MAX_COMMENT_DEPTH, Comment
from board.domain.model.delivery import (
    DeliveryAttempt,
    DeliveryLogEntry,
    DeliveryResult,
    PushMessage,
)
from board.domain.model.event import NotificationCreated, ScoreChange
from board.domain.model.feed import FeedCursor, FeedItem, FeedPage
from board.domain.model.notification import Notification
from board.domain.model.post import Post
from board.domain.model.push_subscription import PushSubscription
from board.domain.model.vote import Vote

__all__ = [
    "Actor",
    "Post",
    "Comment",
    "MAX_COMMENT_DEPTH",
    "Vote",
    "Notification",
    "PushSubscription",
    "PushMessage",
    "DeliveryAttempt",
    "DeliveryLogEntry",
    "DeliveryResult",
    "ScoreChange",
    "NotificationCreated",
    "FeedCursor",
    "FeedItem",
    "FeedPage",
]

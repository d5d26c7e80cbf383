"""Repository interfaces for the board domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from board.domain.repository.actor import ActorRepository
from board.domain.repository.comment import CommentRepository
from board.domain.repository.delivery_log import DeliveryLogRepository
from board.domain.repository.notification import NotificationRepository
from board.domain.repository.post import HotFeedKey, NewFeedKey, PostRepository
from board.domain.repository.push_subscription import PushSubscriptionRepository
from board.domain.repository.rate_limit import RateLimitRepository
from board.domain.repository.vote import VoteRepository

__all__ = [
    "ActorRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
    "NotificationRepository",
    "PushSubscriptionRepository",
    "DeliveryLogRepository",
    "RateLimitRepository",
    "HotFeedKey",
    "NewFeedKey",
]

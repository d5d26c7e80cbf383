"""PostgreSQL repository implementations."""

from board.persistence.repository.actor import PostgresActorRepository
from board.persistence.repository.comment import PostgresCommentRepository
from board.persistence.repository.delivery_log import PostgresDeliveryLogRepository
from board.persistence.repository.notification import PostgresNotificationRepository
from board.persistence.repository.post import PostgresPostRepository
from board.persistence.repository.push_subscription import (
    PostgresPushSubscriptionRepository,
)
from board.persistence.repository.rate_limit import PostgresRateLimitRepository
from board.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresActorRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresNotificationRepository",
    "PostgresPushSubscriptionRepository",
    "PostgresDeliveryLogRepository",
    "PostgresRateLimitRepository",
]

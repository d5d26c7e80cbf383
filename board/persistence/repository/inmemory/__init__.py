"""In-memory repository implementations for testing."""

from .actor import InMemoryActorRepository
from .comment import InMemoryCommentRepository
from .delivery_log import InMemoryDeliveryLogRepository
from .notification import InMemoryNotificationRepository
from .post import InMemoryPostRepository
from .push_subscription import InMemoryPushSubscriptionRepository
from .rate_limit import InMemoryRateLimitRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryActorRepository",
    "InMemoryCommentRepository",
    "InMemoryDeliveryLogRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemoryPushSubscriptionRepository",
    "InMemoryRateLimitRepository",
    "InMemoryVoteRepository",
]

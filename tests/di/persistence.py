"""Mock persistence providers for testing."""

from dishka import Scope, provide

from board.domain.repository import (
    ActorRepository,
    CommentRepository,
    DeliveryLogRepository,
    NotificationRepository,
    PostRepository,
    PushSubscriptionRepository,
    RateLimitRepository,
    VoteRepository,
)
from board.persistence.repository.inmemory import (
    InMemoryActorRepository,
    InMemoryCommentRepository,
    InMemoryDeliveryLogRepository,
    InMemoryNotificationRepository,
    InMemoryPostRepository,
    InMemoryPushSubscriptionRepository,
    InMemoryRateLimitRepository,
    InMemoryVoteRepository,
)
from board.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope so that state survives across requests within one container,
    the way rows survive across transactions. Every test builds its own
    container, which keeps tests isolated.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_actor_repository(self) -> ActorRepository:
        return InMemoryActorRepository()

    @provide
    def get_post_repository(self) -> PostRepository:
        return InMemoryPostRepository()

    @provide
    def get_comment_repository(self) -> CommentRepository:
        return InMemoryCommentRepository()

    @provide
    def get_vote_repository(self) -> VoteRepository:
        return InMemoryVoteRepository()

    @provide
    def get_notification_repository(self) -> NotificationRepository:
        return InMemoryNotificationRepository()

    @provide
    def get_push_subscription_repository(self) -> PushSubscriptionRepository:
        return InMemoryPushSubscriptionRepository()

    @provide
    def get_delivery_log_repository(self) -> DeliveryLogRepository:
        return InMemoryDeliveryLogRepository()

    @provide
    def get_rate_limit_repository(self) -> RateLimitRepository:
        return InMemoryRateLimitRepository()

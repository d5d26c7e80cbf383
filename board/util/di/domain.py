"""Domain layer DI providers."""

from dishka import Scope, provide

from board.config import (
    AuthSettings,
    ModerationSettings,
    NotificationSettings,
    PushSettings,
    RankingSettings,
    RateLimitSettings,
)
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
from board.domain.service import (
    ActorService,
    CommentService,
    ContentPolicy,
    HotFeedCache,
    JWTService,
    ModerationGate,
    NotificationService,
    PostService,
    PushDeliveryWorker,
    PushSender,
    PushSubscriptionService,
    RankEngine,
    RateLimiter,
    ScoreAggregator,
    VoteService,
)
from board.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_actor_service(self, actor_repository: ActorRepository) -> ActorService:
        """Provide actor domain service."""
        return ActorService(actor_repository=actor_repository)

    @provide
    def get_content_policy(self) -> ContentPolicy:
        """Provide content authorization policy."""
        return ContentPolicy()

    @provide
    def get_rate_limiter(
        self, rate_limit_repository: RateLimitRepository, settings: RateLimitSettings
    ) -> RateLimiter:
        """Provide rate limiter."""
        return RateLimiter(rate_limit_repository=rate_limit_repository, settings=settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, post_repository: PostRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, post_repository=post_repository
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> VoteService:
        """Provide vote ledger."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_score_aggregator(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> ScoreAggregator:
        """Provide score aggregator."""
        return ScoreAggregator(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_moderation_gate(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        content_policy: ContentPolicy,
        settings: ModerationSettings,
    ) -> ModerationGate:
        """Provide moderation gate."""
        return ModerationGate(
            post_repository=post_repository,
            comment_repository=comment_repository,
            content_policy=content_policy,
            settings=settings,
        )

    @provide(scope=Scope.APP)
    def get_hot_feed_cache(self) -> HotFeedCache:
        """Provide the process-wide hot feed snapshot."""
        return HotFeedCache()

    @provide
    def get_rank_engine(
        self,
        post_repository: PostRepository,
        settings: RankingSettings,
        cache: HotFeedCache,
    ) -> RankEngine:
        """Provide rank engine."""
        return RankEngine(post_repository=post_repository, settings=settings, cache=cache)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        settings: NotificationSettings,
    ) -> NotificationService:
        """Provide notification dispatcher."""
        return NotificationService(
            notification_repository=notification_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            settings=settings,
        )

    @provide
    def get_push_subscription_service(
        self, push_subscription_repository: PushSubscriptionRepository
    ) -> PushSubscriptionService:
        """Provide push subscription domain service."""
        return PushSubscriptionService(
            push_subscription_repository=push_subscription_repository
        )

    @provide
    def get_push_delivery_worker(
        self,
        push_subscription_repository: PushSubscriptionRepository,
        delivery_log_repository: DeliveryLogRepository,
        sender: PushSender,
        settings: PushSettings,
    ) -> PushDeliveryWorker:
        """Provide push delivery worker."""
        return PushDeliveryWorker(
            push_subscription_repository=push_subscription_repository,
            delivery_log_repository=delivery_log_repository,
            sender=sender,
            settings=settings,
        )

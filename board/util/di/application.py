"""Application layer DI providers."""

from dishka import Scope, provide

from board.application.event import NotificationOutbox
from board.application.usecase.actor import (
    BootstrapSessionUseCase,
    GetCurrentActorUseCase,
)
from board.application.usecase.comment import CreateCommentUseCase
from board.application.usecase.feed import GetFeedUseCase
from board.application.usecase.maintenance import RunMaintenanceUseCase
from board.application.usecase.moderation import DeleteContentUseCase
from board.application.usecase.notification import (
    DeleteNotificationUseCase,
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkReadUseCase,
)
from board.application.usecase.post import CreatePostUseCase, GetThreadUseCase
from board.application.usecase.push import (
    ListSubscriptionsUseCase,
    RemoveSubscriptionUseCase,
    SaveSubscriptionUseCase,
    ToggleSubscriptionUseCase,
)
from board.application.usecase.vote import CastVoteUseCase
from board.domain.service import (
    ActorService,
    CommentService,
    JWTService,
    ModerationGate,
    NotificationService,
    PostService,
    PushDeliveryWorker,
    PushSubscriptionService,
    RankEngine,
    RateLimiter,
    ScoreAggregator,
    VoteService,
)
from board.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Actor use cases
    @provide(scope=Scope.REQUEST)
    def get_bootstrap_session_use_case(
        self, actor_service: ActorService, jwt_service: JWTService
    ) -> BootstrapSessionUseCase:
        """Provide session bootstrap use case."""
        return BootstrapSessionUseCase(
            actor_service=actor_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_current_actor_use_case(
        self, actor_service: ActorService
    ) -> GetCurrentActorUseCase:
        """Provide get current actor use case."""
        return GetCurrentActorUseCase(actor_service=actor_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        actor_service: ActorService,
        post_service: PostService,
        rate_limiter: RateLimiter,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            actor_service=actor_service,
            post_service=post_service,
            rate_limiter=rate_limiter,
        )

    @provide(scope=Scope.REQUEST)
    def get_thread_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        actor_service: ActorService,
        comment_service: CommentService,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        outbox: NotificationOutbox,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            actor_service=actor_service,
            comment_service=comment_service,
            notification_service=notification_service,
            rate_limiter=rate_limiter,
            outbox=outbox,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        actor_service: ActorService,
        rate_limiter: RateLimiter,
        vote_service: VoteService,
        score_aggregator: ScoreAggregator,
        moderation_gate: ModerationGate,
        notification_service: NotificationService,
        outbox: NotificationOutbox,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            actor_service=actor_service,
            rate_limiter=rate_limiter,
            vote_service=vote_service,
            score_aggregator=score_aggregator,
            moderation_gate=moderation_gate,
            notification_service=notification_service,
            outbox=outbox,
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_delete_content_use_case(
        self, actor_service: ActorService, moderation_gate: ModerationGate
    ) -> DeleteContentUseCase:
        """Provide delete content use case."""
        return DeleteContentUseCase(
            actor_service=actor_service, moderation_gate=moderation_gate
        )

    # Feed use cases
    @provide(scope=Scope.REQUEST)
    def get_feed_use_case(self, rank_engine: RankEngine) -> GetFeedUseCase:
        """Provide feed use case."""
        return GetFeedUseCase(rank_engine=rank_engine)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadCountUseCase:
        return GetUnreadCountUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkReadUseCase:
        return MarkReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllReadUseCase:
        return MarkAllReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        return DeleteNotificationUseCase(notification_service=notification_service)

    # Push subscription use cases
    @provide(scope=Scope.REQUEST)
    def get_save_subscription_use_case(
        self,
        push_subscription_service: PushSubscriptionService,
        rate_limiter: RateLimiter,
    ) -> SaveSubscriptionUseCase:
        """Provide save push subscription use case."""
        return SaveSubscriptionUseCase(
            push_subscription_service=push_subscription_service,
            rate_limiter=rate_limiter,
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_subscription_use_case(
        self, push_subscription_service: PushSubscriptionService
    ) -> RemoveSubscriptionUseCase:
        return RemoveSubscriptionUseCase(
            push_subscription_service=push_subscription_service
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_subscription_use_case(
        self, push_subscription_service: PushSubscriptionService
    ) -> ToggleSubscriptionUseCase:
        return ToggleSubscriptionUseCase(
            push_subscription_service=push_subscription_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_subscriptions_use_case(
        self, push_subscription_service: PushSubscriptionService
    ) -> ListSubscriptionsUseCase:
        return ListSubscriptionsUseCase(
            push_subscription_service=push_subscription_service
        )

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_run_maintenance_use_case(
        self,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        push_delivery_worker: PushDeliveryWorker,
    ) -> RunMaintenanceUseCase:
        """Provide maintenance use case."""
        return RunMaintenanceUseCase(
            notification_service=notification_service,
            rate_limiter=rate_limiter,
            push_delivery_worker=push_delivery_worker,
        )

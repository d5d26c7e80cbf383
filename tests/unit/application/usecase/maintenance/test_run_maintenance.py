"""Unit tests for RunMaintenanceUseCase."""

import pytest

from board.application.usecase.maintenance import (
    RunMaintenanceRequest,
    RunMaintenanceUseCase,
)
from board.config import NotificationSettings, PushSettings, RateLimitSettings
from board.domain.model.event import ScoreChange
from board.domain.repository import (
    CommentRepository,
    DeliveryLogRepository,
    NotificationRepository,
    PostRepository,
    PushSubscriptionRepository,
    RateLimitRepository,
)
from board.domain.service import (
    NotificationService,
    PushDeliveryWorker,
    PushSender,
    RateLimiter,
)
from board.domain.value import RateLimitKind, VotableType
from tests.conftest import FakeClock, make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRunMaintenanceUseCase:
    """Tests for RunMaintenanceUseCase."""

    @pytest.mark.asyncio
    async def test_reports_counts_for_each_step(self, unit_env):
        """Old read notifications and stale rate limit events are removed."""
        # Arrange
        clock = FakeClock()
        notifications = NotificationService(
            notification_repository=await unit_env.get(NotificationRepository),
            post_repository=await unit_env.get(PostRepository),
            comment_repository=await unit_env.get(CommentRepository),
            settings=NotificationSettings(),
            clock=clock,
        )
        limiter = RateLimiter(
            rate_limit_repository=await unit_env.get(RateLimitRepository),
            settings=RateLimitSettings(),
            clock=clock,
        )
        worker = PushDeliveryWorker(
            push_subscription_repository=await unit_env.get(PushSubscriptionRepository),
            delivery_log_repository=await unit_env.get(DeliveryLogRepository),
            sender=await unit_env.get(PushSender),
            settings=PushSettings(),
            clock=clock,
        )
        use_case = RunMaintenanceUseCase(
            notification_service=notifications,
            rate_limiter=limiter,
            push_delivery_worker=worker,
        )

        post_repo = await unit_env.get(PostRepository)
        author = make_actor()
        post = await post_repo.save(make_post(author))
        (event,) = await notifications.notify_milestones(
            post,
            ScoreChange(
                votable_type=VotableType.POST,
                votable_id=post.id,
                previous_score=4,
                score=5,
                vote_count=5,
            ),
        )
        await notifications.mark_read(author.id, event.notification.id)
        await limiter.check_and_record(author.id, RateLimitKind.POST)
        clock.advance(days=31)

        # Act
        response = await use_case.execute(RunMaintenanceRequest())

        # Assert
        assert response.notifications_deleted == 1
        assert response.rate_limit_events_deleted == 1
        assert response.delivery_log_entries_deleted == 0

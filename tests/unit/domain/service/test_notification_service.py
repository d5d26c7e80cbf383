"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from board.config import NotificationSettings
from board.domain.error import AuthorizationError, NotFoundError, ValidationError
from board.domain.model.event import ScoreChange
from board.domain.repository import (
    CommentRepository,
    NotificationRepository,
    PostRepository,
)
from board.domain.service import CommentService, NotificationService
from board.domain.value import Line, NotificationId, NotificationType, VotableType
from tests.conftest import FakeClock, make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def build_service(unit_env, clock: FakeClock) -> NotificationService:
    return NotificationService(
        notification_repository=await unit_env.get(NotificationRepository),
        post_repository=await unit_env.get(PostRepository),
        comment_repository=await unit_env.get(CommentRepository),
        settings=NotificationSettings(),
        clock=clock,
    )


def score_change(post, previous: int, score: int) -> ScoreChange:
    return ScoreChange(
        votable_type=VotableType.POST,
        votable_id=post.id,
        previous_score=previous,
        score=score,
        vote_count=score,
    )


class TestReplyNotifications:
    """Tests for NotificationService.notify_reply."""

    @pytest.mark.asyncio
    async def test_comment_notifies_post_author(self, unit_env):
        """A top-level comment notifies the post author with a preview."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        comments = await unit_env.get(CommentService)
        author, replier = make_actor(), make_actor(line=Line.F)
        post = await post_repo.save(make_post(author))
        comment = await comments.create_comment(replier, post.id, "x" * 150)

        # Act
        event = await service.notify_reply(comment)

        # Assert
        notification = event.notification
        assert notification.recipient_id == author.id
        assert notification.type == NotificationType.REPLY_TO_POST
        assert notification.actor_id == replier.id
        assert notification.actor_line == Line.F
        assert notification.comment_id == comment.id
        assert notification.preview == "x" * 100
        assert await service.count_unread(author.id) == 1

    @pytest.mark.asyncio
    async def test_reply_notifies_comment_author(self, unit_env):
        """A reply notifies the parent comment's author, not the post author."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        comments = await unit_env.get(CommentService)
        post_author, commenter = make_actor(), make_actor()
        post = await post_repo.save(make_post(post_author))
        parent = await comments.create_comment(commenter, post.id, "Which car?")
        reply = await comments.create_comment(post_author, post.id, "Third", parent.id)

        # Act
        event = await service.notify_reply(reply)

        # Assert
        assert event.recipient_id == commenter.id
        assert event.notification.type == NotificationType.REPLY_TO_COMMENT

    @pytest.mark.asyncio
    async def test_self_reply_is_silent(self, unit_env):
        """Replying to yourself creates nothing."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        comments = await unit_env.get(CommentService)
        author = make_actor()
        post = await post_repo.save(make_post(author))
        comment = await comments.create_comment(author, post.id, "Update: moving now")

        # Act
        event = await service.notify_reply(comment)

        # Assert
        assert event is None
        assert await service.count_unread(author.id) == 0


class TestMilestoneNotifications:
    """Tests for NotificationService.notify_milestones."""

    @pytest.mark.asyncio
    async def test_milestone_fires_once_per_post(self, unit_env):
        """Bouncing across a threshold does not repeat the notification."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))

        # Act
        first = await service.notify_milestones(post, score_change(post, 4, 5))
        down = await service.notify_milestones(post, score_change(post, 5, 4))
        again = await service.notify_milestones(post, score_change(post, 4, 5))

        # Assert
        assert [e.notification.type for e in first] == [NotificationType.MILESTONE_5]
        assert first[0].notification.preview == "Your post reached 5 upvotes!"
        assert first[0].notification.actor_id is None
        assert down == []
        assert again == []

    @pytest.mark.asyncio
    async def test_jump_over_several_milestones(self, unit_env):
        """A jump across several thresholds notifies each of them."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))

        # Act
        events = await service.notify_milestones(post, score_change(post, 3, 11))

        # Assert
        assert [e.notification.type for e in events] == [
            NotificationType.MILESTONE_5,
            NotificationType.MILESTONE_10,
        ]

    @pytest.mark.asyncio
    async def test_deleted_milestone_is_not_recreated(self, unit_env):
        """Dismissing a milestone does not let it fire again."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        author = make_actor()
        post = await post_repo.save(make_post(author))
        (event,) = await service.notify_milestones(post, score_change(post, 4, 5))
        await service.delete_notification(author.id, event.notification.id)

        # Act
        again = await service.notify_milestones(post, score_change(post, 4, 5))

        # Assert
        assert again == []


class TestInbox:
    """Tests for listing and updating notifications."""

    @pytest.mark.asyncio
    async def test_list_newest_first_and_unread_only(self, unit_env):
        """Pages are newest first and unread_only hides read items."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        post_repo = await unit_env.get(PostRepository)
        author = make_actor()
        post = await post_repo.save(make_post(author))
        (older,) = await service.notify_milestones(post, score_change(post, 4, 5))
        clock.advance(minutes=5)
        (newer,) = await service.notify_milestones(post, score_change(post, 9, 10))
        await service.mark_read(author.id, older.notification.id)

        # Act
        everything = await service.get_notifications(author.id)
        unread = await service.get_notifications(author.id, unread_only=True)

        # Assert
        assert [n.id for n in everything] == [newer.notification.id, older.notification.id]
        assert [n.id for n in unread] == [newer.notification.id]
        assert await service.count_unread(author.id) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit,offset", [(0, 0), (101, 0), (10, -1)])
    async def test_invalid_paging(self, unit_env, limit, offset):
        """Out-of-range limit or offset is rejected."""
        service = await build_service(unit_env, FakeClock())

        with pytest.raises(ValidationError):
            await service.get_notifications(make_actor().id, limit=limit, offset=offset)

    @pytest.mark.asyncio
    async def test_mark_read_requires_ownership(self, unit_env):
        """Only the recipient may mark a notification read."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        (event,) = await service.notify_milestones(post, score_change(post, 0, 5))

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await service.mark_read(make_actor().id, event.notification.id)
        with pytest.raises(NotFoundError):
            await service.mark_read(post.author_id, NotificationId(uuid4()))

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, unit_env):
        """Marking twice keeps the first read timestamp."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        (event,) = await service.notify_milestones(post, score_change(post, 0, 5))
        first = await service.mark_read(post.author_id, event.notification.id)
        clock.advance(minutes=1)

        # Act
        second = await service.mark_read(post.author_id, event.notification.id)

        # Assert
        assert second.read
        assert second.read_at == first.read_at

    @pytest.mark.asyncio
    async def test_mark_all_read(self, unit_env):
        """Every unread notification of the recipient is marked."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        await service.notify_milestones(post, score_change(post, 0, 25))

        # Act
        updated = await service.mark_all_read(post.author_id)

        # Assert
        assert updated == 3
        assert await service.count_unread(post.author_id) == 0
        assert await service.mark_all_read(post.author_id) == 0

    @pytest.mark.asyncio
    async def test_delete_hides_notification(self, unit_env):
        """Deleted notifications leave the inbox and the unread count."""
        # Arrange
        service = await build_service(unit_env, FakeClock())
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        (event,) = await service.notify_milestones(post, score_change(post, 0, 5))

        # Act
        await service.delete_notification(post.author_id, event.notification.id)

        # Assert
        assert await service.get_notifications(post.author_id) == []
        assert await service.count_unread(post.author_id) == 0
        with pytest.raises(NotFoundError):
            await service.delete_notification(post.author_id, event.notification.id)


class TestCleanup:
    """Tests for NotificationService.cleanup_old."""

    @pytest.mark.asyncio
    async def test_only_old_read_notifications_removed(self, unit_env):
        """Read notifications past retention go, unread ones stay."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        (read, unread) = await service.notify_milestones(post, score_change(post, 0, 10))
        await service.mark_read(post.author_id, read.notification.id)
        clock.advance(days=31)

        # Act
        deleted = await service.cleanup_old()

        # Assert
        remaining = await service.get_notifications(post.author_id)
        assert deleted == 1
        assert [n.id for n in remaining] == [unread.notification.id]

    @pytest.mark.asyncio
    async def test_recent_read_notifications_kept(self, unit_env):
        """Read notifications inside the retention period stay."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(make_actor()))
        (event,) = await service.notify_milestones(post, score_change(post, 0, 5))
        await service.mark_read(post.author_id, event.notification.id)
        clock.advance(days=5)

        # Act & Assert
        assert await service.cleanup_old() == 0
        assert await service.cleanup_old(retention_days=1) == 1

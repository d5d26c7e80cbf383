"""Unit tests for CreateCommentUseCase."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from board.application.event import NotificationOutbox
from board.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from board.config import RateLimitSettings
from board.domain.error import (
    ContentDeletedError,
    MaxDepthExceededError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from board.domain.repository import (
    ActorRepository,
    PostRepository,
    RateLimitRepository,
)
from board.domain.service import (
    ActorService,
    CommentService,
    NotificationService,
    RateLimiter,
)
from board.domain.value import DeletionReason, Line, NotificationType, RateLimitKind
from tests.conftest import FakeClock, make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_comment_queues_reply_notification(self, unit_env):
        """Commenting on someone's post queues a reply notification."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        author = await actor_repo.save(make_actor())
        commenter = await actor_repo.save(make_actor(line=Line.R))
        post = await post_repo.save(make_post(author))

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                actor_id=str(commenter.id),
                post_id=str(post.id),
                content="  Running express now  ",
            )
        )

        # Assert
        assert response.comment.content == "Running express now"
        assert response.comment.line == Line.R
        (event,) = outbox.events
        assert event.recipient_id == author.id
        assert event.notification.type == NotificationType.REPLY_TO_POST

    @pytest.mark.asyncio
    async def test_own_post_queues_nothing(self, unit_env):
        """Commenting on your own post sends no notification."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        author = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(author))

        # Act
        await use_case.execute(
            CreateCommentRequest(
                actor_id=str(author.id), post_id=str(post.id), content="Edit: fixed"
            )
        )

        # Assert
        assert outbox.events == []

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        """Whitespace-only comments are rejected."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        actor = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(actor))

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    actor_id=str(actor.id), post_id=str(post.id), content="   "
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_actor(self, unit_env):
        """A token for an actor that no longer exists is refused."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        post = await post_repo.save(make_post(make_actor()))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    actor_id=str(make_actor().id), post_id=str(post.id), content="Hi"
                )
            )

    @pytest.mark.asyncio
    async def test_rejected_replies_do_not_use_quota(self, unit_env):
        """Replies refused for a missing parent or depth leave the quota intact."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = CreateCommentUseCase(
            actor_service=await unit_env.get(ActorService),
            comment_service=await unit_env.get(CommentService),
            notification_service=await unit_env.get(NotificationService),
            rate_limiter=RateLimiter(
                rate_limit_repository=await unit_env.get(RateLimitRepository),
                settings=RateLimitSettings(comment=2),
                clock=FakeClock(),
            ),
            outbox=await unit_env.get(NotificationOutbox),
        )
        actor = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(actor))

        # Act
        for _ in range(2):
            with pytest.raises(NotFoundError):
                await use_case.execute(
                    CreateCommentRequest(
                        actor_id=str(actor.id),
                        post_id=str(post.id),
                        parent_id=str(uuid4()),
                        content="Which car?",
                    )
                )
        top = await use_case.execute(
            CreateCommentRequest(
                actor_id=str(actor.id), post_id=str(post.id), content="Third car"
            )
        )
        reply = await use_case.execute(
            CreateCommentRequest(
                actor_id=str(actor.id),
                post_id=str(post.id),
                parent_id=str(top.comment.comment_id),
                content="Moved up front",
            )
        )
        with pytest.raises(MaxDepthExceededError):
            await use_case.execute(
                CreateCommentRequest(
                    actor_id=str(actor.id),
                    post_id=str(post.id),
                    parent_id=str(reply.comment.comment_id),
                    content="Too deep",
                )
            )

        # Assert
        with pytest.raises(RateLimitError):
            await use_case.execute(
                CreateCommentRequest(
                    actor_id=str(actor.id), post_id=str(post.id), content="Third"
                )
            )

    @pytest.mark.asyncio
    async def test_comment_on_deleted_post_does_not_use_quota(self, unit_env):
        """Comments on a deleted post are refused before being counted."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        limiter = await unit_env.get(RateLimiter)
        actor = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(make_actor()))
        await post_repo.soft_delete(
            post.id, DeletionReason.ADMIN_DELETED, datetime.now(timezone.utc)
        )

        # Act
        with pytest.raises(ContentDeletedError):
            await use_case.execute(
                CreateCommentRequest(
                    actor_id=str(actor.id), post_id=str(post.id), content="Hello?"
                )
            )

        # Assert
        repo = await unit_env.get(RateLimitRepository)
        since = limiter.clock() - limiter.window
        assert await repo.count_since(actor.id, RateLimitKind.COMMENT, since) == 0

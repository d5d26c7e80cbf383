"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from board.domain.error import (
    ContentDeletedError,
    MaxDepthExceededError,
    NotFoundError,
    ValidationError,
)
from board.domain.repository import CommentRepository, PostRepository
from board.domain.service import CommentService
from board.domain.value import CommentId, DeletionReason, Line, PostId
from tests.conftest import FakeClock, make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for CommentService.create_comment."""

    @pytest.mark.asyncio
    async def test_top_level_comment(self, unit_env):
        """A comment copies the author's line and bumps comment_count."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))
        commenter = make_actor(line=Line.SEVEN)

        # Act
        comment = await service.create_comment(commenter, post.id, "Delays on 7 too")

        # Assert
        assert comment.depth == 0
        assert comment.parent_id is None
        assert comment.line == Line.SEVEN
        assert (await post_repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_reply_increments_both_counters(self, unit_env):
        """Replies sit at depth 1 and bump the parent's reply_count."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))
        parent = await service.create_comment(make_actor(), post.id, "First")

        # Act
        reply = await service.create_comment(make_actor(), post.id, "Second", parent.id)

        # Assert
        assert reply.depth == 1
        assert reply.parent_id == parent.id
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 1
        assert (await post_repo.find_by_id(post.id)).comment_count == 2

    @pytest.mark.asyncio
    async def test_reply_to_reply_rejected(self, unit_env):
        """Threads are two levels deep."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))
        parent = await service.create_comment(make_actor(), post.id, "First")
        reply = await service.create_comment(make_actor(), post.id, "Second", parent.id)

        # Act & Assert
        with pytest.raises(MaxDepthExceededError):
            await service.create_comment(make_actor(), post.id, "Third", reply.id)
        assert (await post_repo.find_by_id(post.id)).comment_count == 2

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected(self, unit_env):
        """The parent must belong to the same post."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))
        other = await post_repo.save(make_post(make_actor()))
        parent = await service.create_comment(make_actor(), other.id, "Elsewhere")

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_comment(make_actor(), post.id, "Here", parent.id)

    @pytest.mark.asyncio
    async def test_comment_on_deleted_post_rejected(self, unit_env):
        """Deleted posts accept no new comments."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))
        await post_repo.soft_delete(post.id, DeletionReason.ADMIN_DELETED, post.created_at)

        # Act & Assert
        with pytest.raises(ContentDeletedError):
            await service.create_comment(make_actor(), post.id, "Too late")

    @pytest.mark.asyncio
    async def test_missing_post_or_parent(self, unit_env):
        """Unknown post and parent ids raise NotFoundError."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.create_comment(make_actor(), PostId(uuid4()), "Hello")
        with pytest.raises(NotFoundError):
            await service.create_comment(
                make_actor(), post.id, "Hello", CommentId(uuid4())
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "x" * 501])
    async def test_invalid_content(self, unit_env, content):
        """Blank and overlong bodies are rejected."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post(make_actor()))

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_comment(make_actor(), post.id, content)


class TestThreadComments:
    """Tests for CommentService.get_thread_comments."""

    @pytest.mark.asyncio
    async def test_replies_follow_their_parent(self, unit_env):
        """Each top-level comment is followed by its replies."""
        # Arrange
        clock = FakeClock()
        post_repo = await unit_env.get(PostRepository)
        service = CommentService(
            await unit_env.get(CommentRepository), post_repo, clock=clock
        )
        post = await post_repo.save(make_post(make_actor()))
        first = await service.create_comment(make_actor(), post.id, "First")
        clock.advance(minutes=1)
        second = await service.create_comment(make_actor(), post.id, "Second")
        clock.advance(minutes=1)
        reply = await service.create_comment(make_actor(), post.id, "Reply", first.id)

        # Act
        thread = await service.get_thread_comments(post.id)

        # Assert
        assert [c.id for c in thread] == [first.id, reply.id, second.id]

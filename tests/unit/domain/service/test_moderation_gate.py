"""Unit tests for the moderation gate."""

from uuid import uuid4

import pytest

from board.config import ModerationSettings
from board.domain.error import AuthorizationError, NotFoundError
from board.domain.model import Post
from board.domain.model.event import ScoreChange
from board.domain.repository import PostRepository
from board.domain.service import ContentPolicy, ModerationGate, ScoreAggregator, VoteService
from board.domain.value import DeletionReason, VotableType
from tests.conftest import make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def change_for(post: Post, previous: int, score: int) -> ScoreChange:
    return ScoreChange(
        votable_type=VotableType.POST,
        votable_id=post.id,
        previous_score=previous,
        score=score,
        vote_count=abs(score),
    )


class TestAutoDeletion:
    """Tests for threshold-based soft deletion."""

    @pytest.mark.asyncio
    async def test_fifth_downvote_deletes_post(self, unit_env):
        """A post reaching -5 through votes is soft-deleted."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        vote_service = await unit_env.get(VoteService)
        aggregator = await unit_env.get(ScoreAggregator)
        gate = await unit_env.get(ModerationGate)
        post = await post_repo.save(make_post(make_actor()))

        # Act
        deleted = []
        for _ in range(5):
            target = await vote_service.cast_vote(
                make_actor().id, VotableType.POST, post.id, -1
            )
            change = await aggregator.recompute(VotableType.POST, post.id)
            deleted.append(await gate.apply(change, target))

        # Assert
        assert deleted == [False, False, False, False, True]
        stored = await post_repo.find_by_id(post.id)
        assert stored.is_deleted
        assert stored.deletion_reason == DeletionReason.AUTO_LOW_SCORE
        assert stored.score == -5

    @pytest.mark.asyncio
    async def test_score_above_threshold_is_kept(self, unit_env):
        """A score of -4 does not trigger deletion."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        post = await post_repo.save(make_post(make_actor(), score=-3))

        # Act
        deleted = await gate.apply(change_for(post, -3, -4), post)

        # Assert
        assert not deleted
        assert not (await post_repo.find_by_id(post.id)).is_deleted

    @pytest.mark.asyncio
    async def test_recovered_score_does_not_restore(self, unit_env):
        """Once deleted, an item stays deleted when its score recovers."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        post = await post_repo.save(make_post(make_actor(), score=-4))
        await gate.apply(change_for(post, -4, -5), post)
        deleted_post = await post_repo.find_by_id(post.id)

        # Act
        still_deleted = await gate.apply(change_for(deleted_post, -5, 3), deleted_post)

        # Assert
        assert still_deleted
        stored = await post_repo.find_by_id(post.id)
        assert stored.is_deleted
        assert stored.deleted_at == deleted_post.deleted_at

    def test_crosses_threshold_only_on_the_way_down(self):
        """Only a transition from above to at-or-below the threshold counts."""
        gate = ModerationGate(
            post_repository=None,
            comment_repository=None,
            content_policy=ContentPolicy(),
            settings=ModerationSettings(),
        )
        post = make_post(make_actor())

        assert gate.crosses_threshold(change_for(post, -4, -5))
        assert gate.crosses_threshold(change_for(post, 0, -7))
        assert not gate.crosses_threshold(change_for(post, -5, -6))
        assert not gate.crosses_threshold(change_for(post, -6, -4))
        assert not gate.crosses_threshold(change_for(post, -3, -4))


class TestExplicitDeletion:
    """Tests for author and admin deletion."""

    @pytest.mark.asyncio
    async def test_author_can_delete_own_post(self, unit_env):
        """Authors delete their own content as user_deleted."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        author = make_actor()
        post = await post_repo.save(make_post(author, score=12))

        # Act
        await gate.delete_content(author, VotableType.POST, post.id)

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored.deletion_reason == DeletionReason.USER_DELETED

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_post(self, unit_env):
        """Admins delete other actors' content as admin_deleted."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        post = await post_repo.save(make_post(make_actor()))

        # Act
        await gate.delete_content(make_actor(is_admin=True), VotableType.POST, post.id)

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored.deletion_reason == DeletionReason.ADMIN_DELETED

    @pytest.mark.asyncio
    async def test_other_actor_cannot_delete(self, unit_env):
        """Anyone else is refused and the post stays visible."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        post = await post_repo.save(make_post(make_actor()))

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await gate.delete_content(make_actor(), VotableType.POST, post.id)
        assert not (await post_repo.find_by_id(post.id)).is_deleted

    @pytest.mark.asyncio
    async def test_deleting_twice_keeps_first_reason(self, unit_env):
        """A second deletion leaves the stored reason and timestamp alone."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        gate = await unit_env.get(ModerationGate)
        author = make_actor()
        post = await post_repo.save(make_post(author))
        await gate.delete_content(author, VotableType.POST, post.id)
        first = await post_repo.find_by_id(post.id)

        # Act
        await gate.delete_content(make_actor(is_admin=True), VotableType.POST, post.id)

        # Assert
        second = await post_repo.find_by_id(post.id)
        assert second.deletion_reason == DeletionReason.USER_DELETED
        assert second.deleted_at == first.deleted_at

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        """Deleting an unknown post raises NotFoundError."""
        gate = await unit_env.get(ModerationGate)

        with pytest.raises(NotFoundError):
            await gate.delete_content(make_actor(), VotableType.POST, uuid4())

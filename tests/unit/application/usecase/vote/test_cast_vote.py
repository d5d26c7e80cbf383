"""Unit tests for CastVoteUseCase."""

import asyncio
from datetime import datetime, timezone

import pytest

from board.application.event import NotificationOutbox
from board.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from board.config import RateLimitSettings
from board.domain.error import (
    ContentDeletedError,
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
    ModerationGate,
    NotificationService,
    RateLimiter,
    ScoreAggregator,
    VoteService,
)
from board.domain.value import (
    DeletionReason,
    NotificationType,
    RateLimitKind,
    VotableType,
)
from tests.conftest import FakeClock, make_actor, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def vote_request(actor, post, value: int) -> CastVoteRequest:
    return CastVoteRequest(
        actor_id=str(actor.id),
        votable_type=VotableType.POST,
        votable_id=str(post.id),
        value=value,
    )


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_updates_score_and_reports_my_vote(self, unit_env):
        """The response carries the recomputed score and the caller's vote."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        voter = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(make_actor()))

        # Act
        response = await use_case.execute(vote_request(voter, post, 1))

        # Assert
        assert response.score == 1
        assert response.vote_count == 1
        assert response.my_vote == 1
        assert not response.deleted

    @pytest.mark.asyncio
    async def test_fifth_upvote_queues_milestone(self, unit_env):
        """Crossing a milestone queues its event in the request outbox."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        author = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(author))
        voters = [await actor_repo.save(make_actor()) for _ in range(5)]

        # Act
        for voter in voters[:4]:
            await use_case.execute(vote_request(voter, post, 1))
        queued_before = len(outbox.events)
        await use_case.execute(vote_request(voters[4], post, 1))

        # Assert
        assert queued_before == 0
        (event,) = outbox.events
        assert event.recipient_id == author.id
        assert event.notification.type == NotificationType.MILESTONE_5

    @pytest.mark.asyncio
    async def test_fifth_downvote_reports_deleted(self, unit_env):
        """The vote that crosses the threshold reports the item deleted."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        post = await post_repo.save(make_post(make_actor()))
        voters = [await actor_repo.save(make_actor()) for _ in range(5)]

        # Act
        responses = [
            await use_case.execute(vote_request(voter, post, -1)) for voter in voters
        ]

        # Assert
        assert [r.deleted for r in responses] == [False] * 4 + [True]
        assert responses[-1].score == -5

    @pytest.mark.asyncio
    async def test_invalid_value_does_not_use_quota(self, unit_env):
        """Malformed votes are rejected before the rate limiter records them."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        limiter = await unit_env.get(RateLimiter)
        voter = await actor_repo.save(make_actor())
        post = await post_repo.save(make_post(make_actor()))

        # Act
        with pytest.raises(ValidationError):
            await use_case.execute(vote_request(voter, post, 3))

        # Assert
        repo = await unit_env.get(RateLimitRepository)
        since = limiter.clock() - limiter.window
        assert await repo.count_since(voter.id, RateLimitKind.VOTE, since) == 0

    @pytest.mark.asyncio
    async def test_vote_rate_limit(self, unit_env):
        """Voting faster than the ceiling is refused."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = CastVoteUseCase(
            actor_service=await unit_env.get(ActorService),
            rate_limiter=RateLimiter(
                rate_limit_repository=await unit_env.get(RateLimitRepository),
                settings=RateLimitSettings(vote=2),
                clock=FakeClock(),
            ),
            vote_service=await unit_env.get(VoteService),
            score_aggregator=await unit_env.get(ScoreAggregator),
            moderation_gate=await unit_env.get(ModerationGate),
            notification_service=await unit_env.get(NotificationService),
            outbox=await unit_env.get(NotificationOutbox),
        )
        voter = await actor_repo.save(make_actor())
        posts = [await post_repo.save(make_post(make_actor())) for _ in range(3)]
        await use_case.execute(vote_request(voter, posts[0], 1))
        await use_case.execute(vote_request(voter, posts[1], 1))

        # Act & Assert
        with pytest.raises(RateLimitError):
            await use_case.execute(vote_request(voter, posts[2], 1))
        assert (await post_repo.find_by_id(posts[2].id)).score == 0

    @pytest.mark.asyncio
    async def test_rejected_target_does_not_use_quota(self, unit_env):
        """Votes on missing or deleted posts are refused without counting."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        limiter = await unit_env.get(RateLimiter)
        voter = await actor_repo.save(make_actor())
        missing = make_post(make_actor())
        deleted = await post_repo.save(make_post(make_actor()))
        await post_repo.soft_delete(
            deleted.id, DeletionReason.USER_DELETED, datetime.now(timezone.utc)
        )

        # Act
        with pytest.raises(NotFoundError):
            await use_case.execute(vote_request(voter, missing, 1))
        with pytest.raises(ContentDeletedError):
            await use_case.execute(vote_request(voter, deleted, 1))

        # Assert
        repo = await unit_env.get(RateLimitRepository)
        since = limiter.clock() - limiter.window
        assert await repo.count_since(voter.id, RateLimitKind.VOTE, since) == 0

    @pytest.mark.asyncio
    async def test_concurrent_votes_sum_to_score(self, unit_env):
        """Simultaneous votes on one post leave score equal to the ledger sum."""
        # Arrange
        actor_repo = await unit_env.get(ActorRepository)
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CastVoteUseCase)
        post = await post_repo.save(make_post(make_actor()))
        values = [1, 1, -1, 1, 1, -1, 1, 1]
        voters = [await actor_repo.save(make_actor()) for _ in values]

        # Act
        await asyncio.gather(
            *(
                use_case.execute(vote_request(voter, post, value))
                for voter, value in zip(voters, values)
            )
        )

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored.score == sum(values)
        assert stored.vote_count == len(values)

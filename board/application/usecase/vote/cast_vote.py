"""Cast vote use case."""

from typing import List
from uuid import UUID

from pydantic import BaseModel

from board.application.event import NotificationOutbox
from board.application.usecase.base import BaseUseCase
from board.domain.model import NotificationCreated, Post
from board.domain.service import (
    ActorService,
    ModerationGate,
    NotificationService,
    RateLimiter,
    ScoreAggregator,
    VoteService,
)
from board.domain.service.vote_service import parse_vote_value
from board.domain.value import ActorId, RateLimitKind, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    actor_id: str  # Actor ID from the session token
    votable_type: VotableType
    votable_id: str  # UUID string
    value: int  # -1, 0 (retract) or +1


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    score: int
    vote_count: int
    my_vote: int
    deleted: bool


class CastVoteUseCase(BaseUseCase[CastVoteRequest, CastVoteResponse]):
    """Use case for setting, switching or retracting a vote.

    Everything below runs in the request's transaction, in this order:
    target lock and checks, rate limit, ledger write, score recompute,
    moderation, milestone notifications.
    """

    def __init__(
        self,
        actor_service: ActorService,
        rate_limiter: RateLimiter,
        vote_service: VoteService,
        score_aggregator: ScoreAggregator,
        moderation_gate: ModerationGate,
        notification_service: NotificationService,
        outbox: NotificationOutbox,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            actor_service: Actor domain service
            rate_limiter: Per-actor rate limiter
            vote_service: Vote ledger
            score_aggregator: Score aggregator
            moderation_gate: Auto-moderation
            notification_service: Notification dispatcher
            outbox: Events to publish once the request commits
        """
        self.actor_service = actor_service
        self.rate_limiter = rate_limiter
        self.vote_service = vote_service
        self.score_aggregator = score_aggregator
        self.moderation_gate = moderation_gate
        self.notification_service = notification_service
        self.outbox = outbox

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The item's new score and the actor's current vote

        Raises:
            ValidationError: If the value is not -1, 0 or 1
            NotFoundError: If the actor or item does not exist
            ContentDeletedError: If the item is deleted
            RateLimitError: If the actor is voting too fast
        """
        value = parse_vote_value(request.value)
        votable_id = UUID(request.votable_id)
        actor = await self.actor_service.get_actor(ActorId(UUID(request.actor_id)))

        # Existence and deletion are checked before the quota event is recorded
        target = await self.vote_service.lock_target(request.votable_type, votable_id)
        await self.rate_limiter.check_and_record(actor.id, RateLimitKind.VOTE)

        await self.vote_service.record_vote(
            actor.id, request.votable_type, votable_id, value
        )
        change = await self.score_aggregator.recompute(request.votable_type, votable_id)
        deleted = await self.moderation_gate.apply(change, target)

        events: List[NotificationCreated] = []
        if isinstance(target, Post):
            events = await self.notification_service.notify_milestones(target, change)

        await self.actor_service.touch(actor)
        self.outbox.add(*events)

        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            score=change.score,
            vote_count=change.vote_count,
            my_vote=value.value,
            deleted=deleted,
        )

"""Vote domain service (the vote ledger)."""

from typing import Union
from uuid import UUID, uuid4

import logfire

from board.domain.error import ContentDeletedError, NotFoundError, ValidationError
from board.domain.model.comment import Comment
from board.domain.model.post import Post
from board.domain.model.vote import Vote
from board.domain.repository import CommentRepository, PostRepository, VoteRepository
from board.domain.value import ActorId, CommentId, PostId, VotableType, VoteId, VoteValue

from .base import Clock, Service, utcnow

Votable = Union[Post, Comment]


def parse_vote_value(value: int) -> VoteValue:
    """Convert a raw vote value.

    Raises:
        ValidationError: If the value is not -1, 0 or 1
    """
    if isinstance(value, bool):
        raise ValidationError("Vote value must be -1, 0 or 1")
    try:
        return VoteValue(value)
    except ValueError as e:
        raise ValidationError("Vote value must be -1, 0 or 1") from e


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            comment_repository: Comment repository
            clock: Source of the current time
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.clock = clock

    async def lock_target(self, votable_type: VotableType, votable_id: UUID) -> Votable:
        """Lock a votable item for the rest of the transaction.

        Raises:
            NotFoundError: If the item does not exist
            ContentDeletedError: If the item is soft-deleted
        """
        target: Votable | None
        if votable_type == VotableType.POST:
            target = await self.post_repository.lock(PostId(votable_id))
            resource = "Post"
        else:
            target = await self.comment_repository.lock(CommentId(votable_id))
            resource = "Comment"

        if not target:
            raise NotFoundError(resource, str(votable_id))
        if target.is_deleted:
            raise ContentDeletedError(resource, str(votable_id))
        return target

    async def cast_vote(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
        value: int,
    ) -> Votable:
        """Set, switch or retract an actor's vote on an item.

        The target row is locked first so concurrent votes on one item
        serialize. A value of 0 removes any existing vote; +1 or -1 replaces
        whatever value was stored.

        Args:
            actor_id: Voting actor
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            value: -1, 0 or +1

        Returns:
            The locked target as it was before the vote

        Raises:
            ValidationError: If the value is invalid
            NotFoundError: If the item does not exist
            ContentDeletedError: If the item is soft-deleted
        """
        vote_value = parse_vote_value(value)
        target = await self.lock_target(votable_type, votable_id)
        await self.record_vote(actor_id, votable_type, votable_id, vote_value)
        return target

    async def record_vote(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
        value: VoteValue,
    ) -> None:
        """Write a vote to the ledger for a target already locked by lock_target."""
        with logfire.span(
            "vote_service.record_vote",
            actor_id=str(actor_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            value=value.value,
        ):
            if value == VoteValue.NONE:
                removed = await self.vote_repository.delete_by_actor_and_votable(
                    actor_id, votable_type, votable_id
                )
                logfire.info("Vote retracted", removed=removed)
                return

            now = self.clock()
            await self.vote_repository.upsert(
                Vote(
                    id=VoteId(uuid4()),
                    actor_id=actor_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    value=value,
                    created_at=now,
                    updated_at=now,
                )
            )

    async def get_vote_value(
        self, actor_id: ActorId, votable_type: VotableType, votable_id: UUID
    ) -> VoteValue:
        """The actor's current vote on an item (NONE if absent)."""
        vote = await self.vote_repository.find_by_actor_and_votable(
            actor_id, votable_type, votable_id
        )
        return vote.value if vote else VoteValue.NONE

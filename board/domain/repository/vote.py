"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
from uuid import UUID

from board.domain.model.vote import Vote
from board.domain.value import ActorId, VotableType


class VoteRepository(ABC):
    """Repository for Vote entity.

    The vote ledger: one row per (actor, item). Its rows are the only
    source of truth for an item's score.
    """

    @abstractmethod
    async def find_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find an actor's vote on a specific item.

        Args:
            actor_id: The actor's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote, or overwrite the value of the existing one.

        Args:
            vote: The vote to store

        Returns:
            The stored vote (keeps the original id on conflict)
        """
        pass

    @abstractmethod
    async def delete_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Delete an actor's vote on an item.

        Args:
            actor_id: The actor's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def tally(self, votable_type: VotableType, votable_id: UUID) -> Tuple[int, int]:
        """Sum and count all votes on an item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Tuple of (sum of values, number of votes)
        """
        pass

"""In-memory vote repository for testing."""

from typing import Optional, Tuple
from uuid import UUID

from board.domain.model.vote import Vote
from board.domain.repository.vote import VoteRepository
from board.domain.value import ActorId, VotableType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[Tuple[ActorId, UUID], Vote] = {}

    async def find_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by actor and votable item."""
        vote = self._votes.get((actor_id, votable_id))
        if vote and vote.votable_type == votable_type:
            return vote
        return None

    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote or overwrite the existing value, keeping its id."""
        key = (vote.actor_id, vote.votable_id)
        existing = self._votes.get(key)
        if existing:
            vote = existing.model_copy(
                update={"value": vote.value, "updated_at": vote.updated_at}
            )
        self._votes[key] = vote
        return vote

    async def delete_by_actor_and_votable(
        self,
        actor_id: ActorId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> bool:
        """Delete a vote by actor and votable item."""
        if await self.find_by_actor_and_votable(actor_id, votable_type, votable_id):
            del self._votes[(actor_id, votable_id)]
            return True
        return False

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> Tuple[int, int]:
        """Sum and count votes for a votable item."""
        values = [
            v.value.value
            for v in self._votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]
        return sum(values), len(values)

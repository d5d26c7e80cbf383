"""Vote entity.

Each actor holds at most one vote per item. Changing a vote overwrites the
stored value; retracting removes the row.
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import Field, field_validator

from board.domain.model.common import DomainModel
from board.domain.value import ActorId, VotableType, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per actor per item (enforced by database unique constraint)
    - Stored values are +1 or -1, a retraction deletes the row
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    actor_id: ActorId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: VoteValue) -> VoteValue:
        """Stored votes are never zero."""
        if v == VoteValue.NONE:
            raise ValueError("Stored votes must be +1 or -1")
        return v

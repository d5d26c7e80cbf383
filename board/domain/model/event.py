"""Domain events produced inside write transactions."""

from uuid import UUID

from board.domain.model.common import DomainModel
from board.domain.model.notification import Notification
from board.domain.value import ActorId, VotableType


class ScoreChange(DomainModel):
    """Result of recomputing an item's score from its votes."""

    votable_type: VotableType
    votable_id: UUID
    previous_score: int
    score: int
    vote_count: int

    @property
    def increased(self) -> bool:
        """Whether the score went up."""
        return self.score > self.previous_score


class NotificationCreated(DomainModel):
    """A notification row was written and may be pushed to devices."""

    notification: Notification

    @property
    def recipient_id(self) -> ActorId:
        """Actor the notification is addressed to."""
        return self.notification.recipient_id

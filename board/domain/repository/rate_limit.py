"""Rate limit event repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from board.domain.value import ActorId, RateLimitKind


class RateLimitRepository(ABC):
    """Repository for per-actor action events used by the rate limiter."""

    @abstractmethod
    async def count_since(
        self, actor_id: ActorId, kind: RateLimitKind, since: datetime
    ) -> int:
        """Count an actor's events of one kind at or after a point in time.

        Args:
            actor_id: The actor's ID
            kind: Action kind
            since: Window start

        Returns:
            Number of events in the window
        """
        pass

    @abstractmethod
    async def record_if_below(
        self,
        actor_id: ActorId,
        kind: RateLimitKind,
        since: datetime,
        at: datetime,
        limit: int,
    ) -> bool:
        """Record an event unless the window already holds `limit` events.

        The count and the insert are atomic with respect to other calls for
        the same actor.

        Args:
            actor_id: The actor's ID
            kind: Action kind
            since: Window start
            at: Event timestamp
            limit: Ceiling for the window

        Returns:
            True if the event was recorded, False if the ceiling was reached
        """
        pass

    @abstractmethod
    async def delete_before(self, cutoff: datetime) -> int:
        """Delete events older than cutoff.

        Returns:
            Number of events deleted
        """
        pass

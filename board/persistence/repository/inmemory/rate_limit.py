"""In-memory rate limit repository for testing."""

import asyncio
from datetime import datetime

from board.domain.repository.rate_limit import RateLimitRepository
from board.domain.value import ActorId, RateLimitKind


class InMemoryRateLimitRepository(RateLimitRepository):
    """In-memory implementation of RateLimitRepository for testing."""

    def __init__(self) -> None:
        self._events: list[tuple[ActorId, RateLimitKind, datetime]] = []
        self._lock = asyncio.Lock()

    async def count_since(
        self, actor_id: ActorId, kind: RateLimitKind, since: datetime
    ) -> int:
        """Count an actor's events of one kind in the window."""
        return sum(
            1
            for event_actor, event_kind, at in self._events
            if event_actor == actor_id and event_kind == kind and at >= since
        )

    async def record_if_below(
        self,
        actor_id: ActorId,
        kind: RateLimitKind,
        since: datetime,
        at: datetime,
        limit: int,
    ) -> bool:
        """Record an event unless the ceiling is reached."""
        async with self._lock:
            if await self.count_since(actor_id, kind, since) >= limit:
                return False
            self._events.append((actor_id, kind, at))
            return True

    async def delete_before(self, cutoff: datetime) -> int:
        """Delete events older than cutoff."""
        kept = [event for event in self._events if event[2] >= cutoff]
        deleted = len(self._events) - len(kept)
        self._events = kept
        return deleted

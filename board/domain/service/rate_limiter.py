"""Sliding-window rate limiter."""

from datetime import datetime, timedelta

import logfire

from board.config import RateLimitSettings
from board.domain.error import RateLimitError
from board.domain.repository import RateLimitRepository
from board.domain.value import ActorId, RateLimitKind

from .base import Clock, Service, utcnow


class RateLimiter(Service):
    """Caps how many actions of each kind an actor may take per window.

    All kinds share one window length and have independent ceilings. The
    check and the recorded event are part of the gated write's transaction,
    so a rolled-back write does not consume quota.
    """

    def __init__(
        self,
        rate_limit_repository: RateLimitRepository,
        settings: RateLimitSettings,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize rate limiter.

        Args:
            rate_limit_repository: Rate limit event repository
            settings: Window length and per-kind ceilings
            clock: Source of the current time
        """
        self.rate_limit_repository = rate_limit_repository
        self.settings = settings
        self.clock = clock

    @property
    def window(self) -> timedelta:
        return timedelta(seconds=self.settings.window_seconds)

    def ceiling(self, kind: RateLimitKind) -> int:
        """Maximum number of actions of a kind per window."""
        return getattr(self.settings, kind.value)

    async def allow(self, actor_id: ActorId, kind: RateLimitKind) -> bool:
        """Check whether the actor could act now, without recording anything."""
        count = await self.rate_limit_repository.count_since(
            actor_id, kind, self.clock() - self.window
        )
        return count < self.ceiling(kind)

    async def check_and_record(self, actor_id: ActorId, kind: RateLimitKind) -> None:
        """Record an action, or reject it if the window is full.

        Args:
            actor_id: Acting actor
            kind: Action kind

        Raises:
            RateLimitError: If the actor already reached the ceiling
        """
        now = self.clock()
        limit = self.ceiling(kind)
        recorded = await self.rate_limit_repository.record_if_below(
            actor_id, kind, since=now - self.window, at=now, limit=limit
        )
        if not recorded:
            logfire.warn(
                "Rate limit exceeded",
                actor_id=str(actor_id),
                kind=kind.value,
                limit=limit,
            )
            raise RateLimitError(kind.value, limit, self.settings.window_seconds)

    async def prune(self, now: datetime | None = None) -> int:
        """Delete events that can no longer affect any window.

        Returns:
            Number of events deleted
        """
        cutoff = (now or self.clock()) - self.window
        deleted = await self.rate_limit_repository.delete_before(cutoff)
        logfire.info("Rate limit events pruned", deleted=deleted)
        return deleted

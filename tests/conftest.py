"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from board.domain.model import Actor, Post
from board.domain.value import ActorId, Line, PostId


class FakeClock:
    """Controllable stand-in for the services' clock argument."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_actor(
    line: Line = Line.A, is_admin: bool = False, device_id: str | None = None
) -> Actor:
    """Build an actor bound to a random device."""
    return Actor(
        id=ActorId(uuid4()),
        device_id=device_id or f"device-{uuid4()}",
        line=line,
        is_admin=is_admin,
    )


def make_post(
    author: Actor,
    content: str = "Train is stuck at the bridge again",
    created_at: datetime | None = None,
    score: int = 0,
) -> Post:
    """Build a post written by an actor, tagged with the actor's line."""
    return Post(
        id=PostId(uuid4()),
        author_id=author.id,
        line=author.line,
        content=content,
        score=score,
        created_at=created_at or datetime.now(timezone.utc),
    )

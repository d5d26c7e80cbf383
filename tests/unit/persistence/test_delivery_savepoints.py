"""Unit tests for savepoint use in the push delivery repositories.

A failed statement inside a PostgreSQL transaction aborts it, so the
repositories written to during push fan-out wrap each statement in a
savepoint. These tests check that with a session double.
"""

from contextlib import asynccontextmanager
from types import SimpleNamespace
from uuid import uuid4

import pytest

from board.domain.model import DeliveryLogEntry
from board.domain.value import (
    ActorId,
    DeliveryLogId,
    DeliveryStatus,
    NotificationId,
    PushSubscriptionId,
)
from board.persistence.repository import (
    PostgresDeliveryLogRepository,
    PostgresPushSubscriptionRepository,
)


class RecordingSession:
    """Records statements and savepoint boundaries."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.fail = fail

    @asynccontextmanager
    async def begin_nested(self):
        self.calls.append("savepoint")
        try:
            yield
        except Exception:
            self.calls.append("rollback to savepoint")
            raise
        self.calls.append("release savepoint")

    async def execute(self, stmt):
        self.calls.append("execute")
        if self.fail:
            raise RuntimeError("insert failed")
        return SimpleNamespace(rowcount=1)


def log_entry() -> DeliveryLogEntry:
    return DeliveryLogEntry(
        id=DeliveryLogId(uuid4()),
        notification_id=NotificationId(uuid4()),
        recipient_id=ActorId(uuid4()),
        subscription_id=PushSubscriptionId(uuid4()),
        status=DeliveryStatus.GONE,
        status_code=410,
    )


class TestDeliveryLogAppend:
    """Tests for PostgresDeliveryLogRepository.append."""

    @pytest.mark.asyncio
    async def test_insert_runs_inside_savepoint(self):
        """The insert is released with its own savepoint."""
        # Arrange
        session = RecordingSession()
        repo = PostgresDeliveryLogRepository(session)  # type: ignore[arg-type]

        # Act
        await repo.append(log_entry())

        # Assert
        assert session.calls == ["savepoint", "execute", "release savepoint"]

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_only_the_savepoint(self):
        """A failing insert unwinds its savepoint before the error surfaces."""
        # Arrange
        session = RecordingSession(fail=True)
        repo = PostgresDeliveryLogRepository(session)  # type: ignore[arg-type]

        # Act & Assert
        with pytest.raises(RuntimeError):
            await repo.append(log_entry())
        assert session.calls == ["savepoint", "execute", "rollback to savepoint"]


class TestPushSubscriptionDelete:
    """Tests for PostgresPushSubscriptionRepository.delete."""

    @pytest.mark.asyncio
    async def test_delete_runs_inside_savepoint(self):
        """Removing a gone subscription is isolated from earlier failures."""
        # Arrange
        session = RecordingSession()
        repo = PostgresPushSubscriptionRepository(session)  # type: ignore[arg-type]

        # Act
        deleted = await repo.delete(PushSubscriptionId(uuid4()))

        # Assert
        assert deleted
        assert session.calls == ["savepoint", "execute", "release savepoint"]

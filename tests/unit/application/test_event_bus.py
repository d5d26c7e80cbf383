"""Unit tests for the notification event bus and outbox."""

import asyncio
from uuid import uuid4

import pytest

from board.application.event import (
    NotificationEventBus,
    NotificationOutbox,
    push_delivery_handler,
)
from board.domain.model import Notification
from board.domain.model.event import NotificationCreated
from board.domain.model.push_subscription import PushSubscription
from board.domain.repository import PushSubscriptionRepository
from board.domain.service import PushSender
from board.domain.value import (
    ActorId,
    NotificationId,
    NotificationType,
    PostId,
    PushSubscriptionId,
)
from tests.di import build_test_container


def milestone_event() -> NotificationCreated:
    return NotificationCreated(
        notification=Notification(
            id=NotificationId(uuid4()),
            recipient_id=ActorId(uuid4()),
            type=NotificationType.MILESTONE_5,
            post_id=PostId(uuid4()),
        )
    )


class TestNotificationEventBus:
    """Tests for NotificationEventBus."""

    @pytest.mark.asyncio
    async def test_publish_does_not_wait_for_handlers(self):
        """Publishing returns before slow handlers finish."""
        # Arrange
        bus = NotificationEventBus()
        received = []

        async def slow_handler(event):
            await asyncio.sleep(0.01)
            received.append(event)

        bus.subscribe(slow_handler)
        event = milestone_event()

        # Act
        bus.publish(event)

        # Assert
        assert received == []
        assert bus.pending == 1
        await bus.drain()
        assert received == [event]
        assert bus.pending == 0

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_affect_others(self):
        """One handler raising leaves the other handlers and the caller alone."""
        # Arrange
        bus = NotificationEventBus()
        received = []

        async def broken_handler(event):
            raise RuntimeError("push service down")

        async def recording_handler(event):
            received.append(event)

        bus.subscribe(broken_handler)
        bus.subscribe(recording_handler)

        # Act
        bus.publish(milestone_event())
        await bus.drain()

        # Assert
        assert len(received) == 1


class TestNotificationOutbox:
    """Tests for NotificationOutbox."""

    @pytest.mark.asyncio
    async def test_events_are_held_until_published(self):
        """Events reach the bus only when the outbox is published."""
        # Arrange
        bus = NotificationEventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(handler)
        outbox = NotificationOutbox()
        first, second = milestone_event(), milestone_event()

        # Act
        outbox.add(first, second)
        await asyncio.sleep(0)
        held = list(received)
        outbox.publish_to(bus)
        await bus.drain()

        # Assert
        assert held == []
        assert received == [first, second]
        assert outbox.events == []

    @pytest.mark.asyncio
    async def test_request_scope_publishes_on_close(self):
        """Closing a request scope publishes its outbox."""
        # Arrange
        container = build_test_container()
        bus = await container.get(NotificationEventBus)
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(handler)
        event = milestone_event()

        # Act
        async with container() as request_container:
            outbox = await request_container.get(NotificationOutbox)
            outbox.add(event)
            assert bus.pending == 0
        await bus.drain()

        # Assert
        assert received == [event]
        await container.close()

    @pytest.mark.asyncio
    async def test_request_scope_error_discards_outbox(self):
        """A request that fails never publishes its events."""
        # Arrange
        container = build_test_container()
        bus = await container.get(NotificationEventBus)
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(handler)

        # Act
        with pytest.raises(RuntimeError):
            async with container() as request_container:
                outbox = await request_container.get(NotificationOutbox)
                outbox.add(milestone_event())
                raise RuntimeError("write failed")
        await bus.drain()

        # Assert
        assert received == []
        await container.close()


class TestPushDeliveryHandler:
    """Tests for the push delivery handler."""

    @pytest.mark.asyncio
    async def test_handler_delivers_in_fresh_scope(self):
        """The handler resolves a worker and pushes to the recipient's devices."""
        # Arrange
        container = build_test_container()
        sender = await container.get(PushSender)
        event = milestone_event()
        async with container() as request_container:
            repo = await request_container.get(PushSubscriptionRepository)
            await repo.upsert(
                PushSubscription(
                    id=PushSubscriptionId(uuid4()),
                    actor_id=event.recipient_id,
                    device_id="phone",
                    endpoint="https://push.example.com/phone",
                    keys_p256dh="p256dh-key",
                    keys_auth="auth-secret",
                )
            )
        handler = push_delivery_handler(container)

        # Act
        await handler(event)

        # Assert
        assert len(sender.sent) == 1
        _, message = sender.sent[0]
        assert message.title == "Your post reached 5 upvotes!"
        await container.close()

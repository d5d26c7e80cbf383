"""In-process event bus for notification events.

Use cases collect NotificationCreated events in a request-scoped outbox.
The outbox is handed to the bus only after the request's transaction has
committed, and the bus runs each handler as its own asyncio task so a slow
or failing push never holds up or fails the write that produced it.
"""

import asyncio
from typing import Awaitable, Callable, List, Set

import logfire
from dishka import AsyncContainer

from board.domain.model.event import NotificationCreated
from board.domain.service import PushDeliveryWorker

EventHandler = Callable[[NotificationCreated], Awaitable[object]]


class NotificationEventBus:
    """Fan-out of notification events to subscribed handlers."""

    def __init__(self) -> None:
        self._handlers: List[EventHandler] = []
        self._tasks: Set[asyncio.Task] = set()

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: NotificationCreated) -> None:
        """Schedule every handler for an event and return immediately.

        Must be called from a running event loop.
        """
        for handler in self._handlers:
            task = asyncio.create_task(self._run(handler, event))
            # The loop only keeps weak references to tasks
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _run(self, handler: EventHandler, event: NotificationCreated) -> None:
        try:
            await handler(event)
        except Exception as e:
            logfire.error(
                "Notification handler failed",
                handler=getattr(handler, "__name__", repr(handler)),
                notification_id=str(event.notification.id),
                error=str(e),
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled handler to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


class NotificationOutbox:
    """Events produced by one request, published once it commits."""

    def __init__(self) -> None:
        self.events: List[NotificationCreated] = []

    def add(self, *events: NotificationCreated) -> None:
        self.events.extend(events)

    def publish_to(self, bus: NotificationEventBus) -> None:
        for event in self.events:
            bus.publish(event)
        if self.events:
            logfire.debug("Notification events published", count=len(self.events))
        self.events = []


def push_delivery_handler(container: AsyncContainer) -> EventHandler:
    """Build a handler that delivers each event in its own request scope.

    Every delivery gets a fresh session, so delivery log writes and
    subscription cleanup commit independently of the triggering request.
    """

    async def deliver_push(event: NotificationCreated) -> None:
        async with container() as request_container:
            worker = await request_container.get(PushDeliveryWorker)
            await worker.deliver(event)

    return deliver_push

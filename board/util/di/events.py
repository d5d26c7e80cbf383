"""Event DI providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from board.application.event import NotificationEventBus, NotificationOutbox
from board.util.di.base import ProviderBase


class ProdEventProvider(ProviderBase):
    """Notification event bus and per-request outbox - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_event_bus(self) -> NotificationEventBus:
        """Provide the process-wide event bus."""
        return NotificationEventBus()

    @provide(scope=Scope.REQUEST)
    async def get_outbox(
        self, bus: NotificationEventBus
    ) -> AsyncIterator[NotificationOutbox]:
        """Provide the request's outbox.

        Events are published only when the request scope closes cleanly. An
        exception thrown into the scope skips publishing, so rolled back
        writes never reach the bus.
        """
        outbox = NotificationOutbox()
        try:
            yield outbox
        except Exception:
            # The container re-raises the original error after finalizers run
            logfire.debug("Dropping unpublished events", count=len(outbox.events))
            return
        outbox.publish_to(bus)

"""Delivery log repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from board.domain.model.delivery import DeliveryLogEntry
from board.domain.value import NotificationId


class DeliveryLogRepository(ABC):
    """Append-only store of push delivery attempts."""

    @abstractmethod
    async def append(self, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        """Record one delivery attempt.

        A failed append must leave the surrounding transaction usable.
        """
        pass

    @abstractmethod
    async def find_by_notification(
        self, notification_id: NotificationId
    ) -> List[DeliveryLogEntry]:
        """Find all attempts for a notification, oldest first."""
        pass

    @abstractmethod
    async def delete_before(self, cutoff: datetime) -> int:
        """Delete entries created before cutoff.

        Returns:
            Number of entries deleted
        """
        pass

"""In-memory delivery log repository for testing."""

from datetime import datetime

from board.domain.model.delivery import DeliveryLogEntry
from board.domain.repository.delivery_log import DeliveryLogRepository
from board.domain.value import NotificationId


class InMemoryDeliveryLogRepository(DeliveryLogRepository):
    """In-memory implementation of DeliveryLogRepository for testing."""

    def __init__(self) -> None:
        self._entries: list[DeliveryLogEntry] = []

    async def append(self, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        self._entries.append(entry)
        return entry

    async def find_by_notification(
        self, notification_id: NotificationId
    ) -> list[DeliveryLogEntry]:
        return [e for e in self._entries if e.notification_id == notification_id]

    async def delete_before(self, cutoff: datetime) -> int:
        kept = [e for e in self._entries if e.created_at >= cutoff]
        deleted = len(self._entries) - len(kept)
        self._entries = kept
        return deleted

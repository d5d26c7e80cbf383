"""In-memory notification repository for testing."""

from datetime import datetime
from typing import Optional

from board.domain.model.notification import Notification
from board.domain.repository.notification import NotificationRepository
from board.domain.value import ActorId, NotificationId, NotificationType, PostId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a non-deleted notification by ID."""
        notification = self._notifications.get(notification_id)
        if notification and notification.deleted_at is None:
            return notification
        return None

    async def find_by_recipient(
        self,
        recipient_id: ActorId,
        limit: int,
        offset: int,
        unread_only: bool = False,
    ) -> list[Notification]:
        """Find a recipient's notifications, newest first."""
        notifications = [
            n
            for n in self._notifications.values()
            if n.recipient_id == recipient_id
            and n.deleted_at is None
            and not (unread_only and n.read)
        ]
        notifications.sort(key=lambda n: (n.created_at, n.id), reverse=True)
        return notifications[offset : offset + limit]

    async def count_unread(self, recipient_id: ActorId) -> int:
        """Count unread, non-deleted notifications."""
        return sum(
            1
            for n in self._notifications.values()
            if n.recipient_id == recipient_id and not n.read and n.deleted_at is None
        )

    async def milestone_exists(
        self,
        recipient_id: ActorId,
        post_id: PostId,
        notification_type: NotificationType,
    ) -> bool:
        """Check for any milestone, including soft-deleted ones."""
        return any(
            n.recipient_id == recipient_id
            and n.post_id == post_id
            and n.type == notification_type
            for n in self._notifications.values()
        )

    async def mark_read(
        self, notification_id: NotificationId, read_at: datetime
    ) -> None:
        """Mark one notification read."""
        notification = self._notifications.get(notification_id)
        if notification and not notification.read:
            self._notifications[notification_id] = notification.model_copy(
                update={"read": True, "read_at": read_at}
            )

    async def mark_all_read(self, recipient_id: ActorId, read_at: datetime) -> int:
        """Mark every unread notification of a recipient read."""
        updated = 0
        for notification in list(self._notifications.values()):
            if (
                notification.recipient_id == recipient_id
                and not notification.read
                and notification.deleted_at is None
            ):
                self._notifications[notification.id] = notification.model_copy(
                    update={"read": True, "read_at": read_at}
                )
                updated += 1
        return updated

    async def soft_delete(
        self, notification_id: NotificationId, deleted_at: datetime
    ) -> None:
        """Soft-delete a notification."""
        notification = self._notifications.get(notification_id)
        if notification and notification.deleted_at is None:
            self._notifications[notification_id] = notification.model_copy(
                update={"deleted_at": deleted_at}
            )

    async def delete_read_before(self, cutoff: datetime) -> int:
        """Hard-delete read notifications older than cutoff."""
        stale = [
            n.id
            for n in self._notifications.values()
            if n.read and n.read_at is not None and n.read_at < cutoff
        ]
        for notification_id in stale:
            del self._notifications[notification_id]
        return len(stale)

"""Notification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from board.domain.model.notification import Notification
from board.domain.value import ActorId, NotificationId, NotificationType, PostId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Insert a notification.

        Args:
            notification: The notification to save

        Returns:
            The saved notification
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID, excluding soft-deleted rows."""
        pass

    @abstractmethod
    async def find_by_recipient(
        self,
        recipient_id: ActorId,
        limit: int,
        offset: int,
        unread_only: bool = False,
    ) -> List[Notification]:
        """Find a recipient's notifications, newest first.

        Args:
            recipient_id: The recipient's actor ID
            limit: Maximum number of notifications to return
            offset: Number of notifications to skip
            unread_only: Whether to return unread notifications only

        Returns:
            List of non-deleted notifications
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: ActorId) -> int:
        """Count a recipient's unread, non-deleted notifications."""
        pass

    @abstractmethod
    async def milestone_exists(
        self,
        recipient_id: ActorId,
        post_id: PostId,
        notification_type: NotificationType,
    ) -> bool:
        """Check whether a milestone was ever recorded for a post.

        Soft-deleted rows count, so a dismissed milestone is not re-sent.

        Args:
            recipient_id: The post author's actor ID
            post_id: The post ID
            notification_type: The milestone type

        Returns:
            True if a matching notification exists
        """
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId, read_at: datetime
    ) -> None:
        """Mark one notification read."""
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: ActorId, read_at: datetime) -> int:
        """Mark every unread notification of a recipient read.

        Args:
            recipient_id: The recipient's actor ID
            read_at: Read timestamp

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, notification_id: NotificationId, deleted_at: datetime
    ) -> None:
        """Soft-delete a notification."""
        pass

    @abstractmethod
    async def delete_read_before(self, cutoff: datetime) -> int:
        """Hard-delete read notifications whose read_at is before cutoff.

        Args:
            cutoff: Oldest read_at to keep

        Returns:
            Number of notifications deleted
        """
        pass

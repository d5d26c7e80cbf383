"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Notification
from board.domain.repository import NotificationRepository
from board.domain.value import ActorId, NotificationId, NotificationType, PostId
from board.persistence.mappers import notification_to_dict, row_to_notification
from board.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification."""
        with logfire.span(
            "notification_repository.save",
            notification_id=str(notification.id),
            type=notification.type.value,
        ):
            stmt = insert(notifications_table).values(
                **notification_to_dict(notification)
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a non-deleted notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id,
            notifications_table.c.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_recipient(
        self,
        recipient_id: ActorId,
        limit: int,
        offset: int,
        unread_only: bool = False,
    ) -> List[Notification]:
        """Find a recipient's notifications, newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.recipient_id == recipient_id,
            notifications_table.c.deleted_at.is_(None),
        )

        if unread_only:
            stmt = stmt.where(notifications_table.c.read.is_(False))

        stmt = (
            stmt.order_by(
                desc(notifications_table.c.created_at), desc(notifications_table.c.id)
            )
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_unread(self, recipient_id: ActorId) -> int:
        """Count unread, non-deleted notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                notifications_table.c.recipient_id == recipient_id,
                notifications_table.c.read.is_(False),
                notifications_table.c.deleted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def milestone_exists(
        self,
        recipient_id: ActorId,
        post_id: PostId,
        notification_type: NotificationType,
    ) -> bool:
        """Check for any milestone row, including soft-deleted ones."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                notifications_table.c.recipient_id == recipient_id,
                notifications_table.c.post_id == post_id,
                notifications_table.c.type == notification_type.value,
            )
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def mark_read(
        self, notification_id: NotificationId, read_at: datetime
    ) -> None:
        """Mark one notification read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.id == notification_id,
                notifications_table.c.read.is_(False),
            )
            .values(read=True, read_at=read_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_all_read(self, recipient_id: ActorId, read_at: datetime) -> int:
        """Mark every unread notification of a recipient read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.recipient_id == recipient_id,
                notifications_table.c.read.is_(False),
                notifications_table.c.deleted_at.is_(None),
            )
            .values(read=True, read_at=read_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def soft_delete(
        self, notification_id: NotificationId, deleted_at: datetime
    ) -> None:
        """Soft-delete a notification."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.id == notification_id,
                notifications_table.c.deleted_at.is_(None),
            )
            .values(deleted_at=deleted_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_read_before(self, cutoff: datetime) -> int:
        """Hard-delete read notifications older than cutoff."""
        with logfire.span("notification_repository.delete_read_before"):
            stmt = delete(notifications_table).where(
                notifications_table.c.read.is_(True),
                notifications_table.c.read_at < cutoff,
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            deleted = result.rowcount  # type: ignore[attr-defined]
            logfire.info("Old notifications deleted", count=deleted)
            return deleted

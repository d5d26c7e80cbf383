"""PostgreSQL implementation of DeliveryLog repository."""

from datetime import datetime
from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import DeliveryLogEntry
from board.domain.repository import DeliveryLogRepository
from board.domain.value import NotificationId
from board.persistence.mappers import (
    delivery_log_entry_to_dict,
    row_to_delivery_log_entry,
)
from board.persistence.tables import push_delivery_log_table


class PostgresDeliveryLogRepository(DeliveryLogRepository):
    """PostgreSQL implementation of DeliveryLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        """Insert under a savepoint so a failed write leaves the transaction usable."""
        stmt = insert(push_delivery_log_table).values(**delivery_log_entry_to_dict(entry))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return entry

    async def find_by_notification(
        self, notification_id: NotificationId
    ) -> List[DeliveryLogEntry]:
        stmt = (
            select(push_delivery_log_table)
            .where(push_delivery_log_table.c.notification_id == notification_id)
            .order_by(push_delivery_log_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_delivery_log_entry(row._asdict()) for row in result.fetchall()]

    async def delete_before(self, cutoff: datetime) -> int:
        stmt = delete(push_delivery_log_table).where(
            push_delivery_log_table.c.created_at < cutoff
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

"""PostgreSQL implementation of PushSubscription repository."""

from typing import List, Optional

import logfire
from sqlalchemy import and_, delete, desc, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import PushSubscription
from board.domain.repository import PushSubscriptionRepository
from board.domain.value import ActorId, PushSubscriptionId
from board.persistence.mappers import (
    push_subscription_to_dict,
    row_to_push_subscription,
)
from board.persistence.tables import push_subscriptions_table


class PostgresPushSubscriptionRepository(PushSubscriptionRepository):
    """PostgreSQL implementation of PushSubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Create or refresh the subscription for (actor, device)."""
        with logfire.span(
            "push_subscription_repository.upsert",
            actor_id=str(subscription.actor_id),
        ):
            stmt = insert(push_subscriptions_table).values(
                **push_subscription_to_dict(subscription)
            )
            stmt = stmt.on_conflict_do_update(
                constraint="uq_push_subscriptions_actor_device",
                set_={
                    "endpoint": stmt.excluded.endpoint,
                    "keys_p256dh": stmt.excluded.keys_p256dh,
                    "keys_auth": stmt.excluded.keys_auth,
                    "user_agent": stmt.excluded.user_agent,
                    "enabled": True,
                    "updated_at": stmt.excluded.updated_at,
                },
            ).returning(push_subscriptions_table)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_push_subscription(row._asdict())  # type: ignore[union-attr]

    async def find_by_actor(
        self, actor_id: ActorId, enabled_only: bool = False
    ) -> List[PushSubscription]:
        """Find an actor's subscriptions, newest first."""
        stmt = select(push_subscriptions_table).where(
            push_subscriptions_table.c.actor_id == actor_id
        )

        if enabled_only:
            stmt = stmt.where(push_subscriptions_table.c.enabled.is_(True))

        stmt = stmt.order_by(desc(push_subscriptions_table.c.created_at))

        result = await self.session.execute(stmt)
        return [row_to_push_subscription(row._asdict()) for row in result.fetchall()]

    async def find_by_actor_and_device(
        self, actor_id: ActorId, device_id: str
    ) -> Optional[PushSubscription]:
        """Find the subscription for one device."""
        stmt = select(push_subscriptions_table).where(
            and_(
                push_subscriptions_table.c.actor_id == actor_id,
                push_subscriptions_table.c.device_id == device_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_push_subscription(row._asdict()) if row else None

    async def save(self, subscription: PushSubscription) -> PushSubscription:
        """Update an existing subscription."""
        data = push_subscription_to_dict(subscription)
        data.pop("id")
        data.pop("created_at")
        stmt = (
            update(push_subscriptions_table)
            .where(push_subscriptions_table.c.id == subscription.id)
            .values(**data)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return subscription

    async def delete_by_actor_and_device(self, actor_id: ActorId, device_id: str) -> bool:
        """Delete the subscription for one device."""
        stmt = delete(push_subscriptions_table).where(
            and_(
                push_subscriptions_table.c.actor_id == actor_id,
                push_subscriptions_table.c.device_id == device_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, subscription_id: PushSubscriptionId) -> bool:
        """Delete a subscription by ID under its own savepoint."""
        stmt = delete(push_subscriptions_table).where(
            push_subscriptions_table.c.id == subscription_id
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

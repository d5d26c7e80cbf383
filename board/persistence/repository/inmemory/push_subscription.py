"""In-memory push subscription repository for testing."""

from typing import Optional

from board.domain.model.push_subscription import PushSubscription
from board.domain.repository.push_subscription import PushSubscriptionRepository
from board.domain.value import ActorId, PushSubscriptionId


class InMemoryPushSubscriptionRepository(PushSubscriptionRepository):
    """In-memory implementation of PushSubscriptionRepository for testing."""

    def __init__(self) -> None:
        self._subscriptions: dict[PushSubscriptionId, PushSubscription] = {}

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Create or refresh the subscription for (actor, device)."""
        existing = await self.find_by_actor_and_device(
            subscription.actor_id, subscription.device_id
        )
        if existing:
            subscription = existing.model_copy(
                update={
                    "endpoint": subscription.endpoint,
                    "keys_p256dh": subscription.keys_p256dh,
                    "keys_auth": subscription.keys_auth,
                    "user_agent": subscription.user_agent,
                    "enabled": True,
                    "updated_at": subscription.updated_at,
                }
            )
        self._subscriptions[subscription.id] = subscription
        return subscription

    async def find_by_actor(
        self, actor_id: ActorId, enabled_only: bool = False
    ) -> list[PushSubscription]:
        """Find an actor's subscriptions, newest first."""
        subscriptions = [
            s
            for s in self._subscriptions.values()
            if s.actor_id == actor_id and (s.enabled or not enabled_only)
        ]
        subscriptions.sort(key=lambda s: s.created_at, reverse=True)
        return subscriptions

    async def find_by_actor_and_device(
        self, actor_id: ActorId, device_id: str
    ) -> Optional[PushSubscription]:
        """Find the subscription for one device."""
        for subscription in self._subscriptions.values():
            if subscription.actor_id == actor_id and subscription.device_id == device_id:
                return subscription
        return None

    async def save(self, subscription: PushSubscription) -> PushSubscription:
        """Update a subscription."""
        self._subscriptions[subscription.id] = subscription
        return subscription

    async def delete_by_actor_and_device(self, actor_id: ActorId, device_id: str) -> bool:
        """Delete the subscription for one device."""
        existing = await self.find_by_actor_and_device(actor_id, device_id)
        if not existing:
            return False
        del self._subscriptions[existing.id]
        return True

    async def delete(self, subscription_id: PushSubscriptionId) -> bool:
        """Delete a subscription by ID."""
        return self._subscriptions.pop(subscription_id, None) is not None

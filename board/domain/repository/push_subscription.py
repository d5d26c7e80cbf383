"""Push subscription repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from board.domain.model.push_subscription import PushSubscription
from board.domain.value import ActorId, PushSubscriptionId


class PushSubscriptionRepository(ABC):
    """Repository for PushSubscription entity."""

    @abstractmethod
    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Create or refresh the subscription for (actor, device).

        An existing row keeps its id and created_at, takes the new endpoint,
        keys and user agent, and is re-enabled.

        Args:
            subscription: The subscription to store

        Returns:
            The stored subscription
        """
        pass

    @abstractmethod
    async def find_by_actor(
        self, actor_id: ActorId, enabled_only: bool = False
    ) -> List[PushSubscription]:
        """Find an actor's subscriptions, newest first.

        Args:
            actor_id: The actor's ID
            enabled_only: Whether to skip disabled subscriptions

        Returns:
            List of subscriptions
        """
        pass

    @abstractmethod
    async def find_by_actor_and_device(
        self, actor_id: ActorId, device_id: str
    ) -> Optional[PushSubscription]:
        """Find the subscription for one device."""
        pass

    @abstractmethod
    async def save(self, subscription: PushSubscription) -> PushSubscription:
        """Update an existing subscription."""
        pass

    @abstractmethod
    async def delete_by_actor_and_device(self, actor_id: ActorId, device_id: str) -> bool:
        """Delete the subscription for one device.

        Returns:
            True if a subscription was deleted
        """
        pass

    @abstractmethod
    async def delete(self, subscription_id: PushSubscriptionId) -> bool:
        """Delete a subscription by ID.

        A failed delete must leave the surrounding transaction usable.

        Returns:
            True if a subscription was deleted
        """
        pass

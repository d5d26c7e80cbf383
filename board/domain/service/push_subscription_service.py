"""Push subscription domain service."""

from typing import List, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from board.domain.error import NotFoundError, ValidationError
from board.domain.model.push_subscription import PushSubscription
from board.domain.repository import PushSubscriptionRepository
from board.domain.value import ActorId, DeviceId, PushEndpoint, PushKeys, PushSubscriptionId

from .base import Clock, Service, utcnow


def validate_subscription(
    device_id: str, endpoint: str, p256dh: str, auth: str
) -> tuple[DeviceId, PushEndpoint, PushKeys]:
    """Validate the parts of a browser push subscription.

    Raises:
        ValidationError: If the device id, endpoint or keys are invalid
    """
    try:
        return DeviceId(device_id), PushEndpoint(endpoint), PushKeys(p256dh=p256dh, auth=auth)
    except PydanticValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise ValidationError(message) from e


class PushSubscriptionService(Service):
    """Domain service for device push registrations."""

    def __init__(
        self,
        push_subscription_repository: PushSubscriptionRepository,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize push subscription service.

        Args:
            push_subscription_repository: Push subscription repository
            clock: Source of the current time
        """
        self.push_subscription_repository = push_subscription_repository
        self.clock = clock

    async def save_subscription(
        self,
        actor_id: ActorId,
        device_id: str,
        endpoint: str,
        p256dh: str,
        auth: str,
        user_agent: Optional[str] = None,
    ) -> PushSubscription:
        """Create or refresh the subscription for a device.

        Saving again for the same device updates the endpoint and keys and
        re-enables it.

        Args:
            actor_id: Subscribing actor
            device_id: Opaque device identifier
            endpoint: Push service URL (https, at most 2048 characters)
            p256dh: Client public key
            auth: Client auth secret
            user_agent: Optional browser user agent

        Returns:
            The stored subscription

        Raises:
            ValidationError: If the endpoint or keys are invalid
        """
        device, url, keys = validate_subscription(device_id, endpoint, p256dh, auth)

        now = self.clock()
        subscription = await self.push_subscription_repository.upsert(
            PushSubscription(
                id=PushSubscriptionId(uuid4()),
                actor_id=actor_id,
                device_id=device.root,
                endpoint=url.root,
                keys_p256dh=keys.p256dh,
                keys_auth=keys.auth,
                user_agent=user_agent,
                enabled=True,
                created_at=now,
                updated_at=now,
            )
        )
        logfire.info(
            "Push subscription saved",
            actor_id=str(actor_id),
            subscription_id=str(subscription.id),
        )
        return subscription

    async def remove_subscription(self, actor_id: ActorId, device_id: str) -> bool:
        """Remove a device's subscription. Removing twice is harmless.

        Returns:
            True if a subscription was removed
        """
        removed = await self.push_subscription_repository.delete_by_actor_and_device(
            actor_id, device_id
        )
        logfire.info("Push subscription removed", actor_id=str(actor_id), removed=removed)
        return removed

    async def toggle_subscription(
        self, actor_id: ActorId, device_id: str, enabled: bool
    ) -> PushSubscription:
        """Enable or disable a device's subscription.

        Raises:
            NotFoundError: If the device has no subscription
        """
        subscription = await self.push_subscription_repository.find_by_actor_and_device(
            actor_id, device_id
        )
        if not subscription:
            raise NotFoundError("Subscription", device_id)

        return await self.push_subscription_repository.save(
            subscription.model_copy(update={"enabled": enabled, "updated_at": self.clock()})
        )

    async def list_subscriptions(self, actor_id: ActorId) -> List[PushSubscription]:
        return await self.push_subscription_repository.find_by_actor(actor_id)

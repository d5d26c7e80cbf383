"""Push subscription management use cases."""

from typing import List
from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.view import PushSubscriptionView
from board.domain.service import PushSubscriptionService
from board.domain.value import ActorId


class RemoveSubscriptionRequest(BaseModel):
    """Remove push subscription request."""

    actor_id: str
    device_id: str


class RemoveSubscriptionResponse(BaseModel):
    """Remove push subscription response."""

    removed: bool


class RemoveSubscriptionUseCase:
    """Use case for unsubscribing a device. Repeating it is harmless."""

    def __init__(self, push_subscription_service: PushSubscriptionService) -> None:
        self.push_subscription_service = push_subscription_service

    async def execute(
        self, request: RemoveSubscriptionRequest
    ) -> RemoveSubscriptionResponse:
        removed = await self.push_subscription_service.remove_subscription(
            ActorId(UUID(request.actor_id)), request.device_id
        )
        return RemoveSubscriptionResponse(removed=removed)


class ToggleSubscriptionRequest(BaseModel):
    """Toggle push subscription request."""

    actor_id: str
    device_id: str
    enabled: bool


class ToggleSubscriptionResponse(BaseModel):
    """Toggle push subscription response."""

    subscription: PushSubscriptionView


class ToggleSubscriptionUseCase:
    """Use case for pausing or resuming pushes to a device."""

    def __init__(self, push_subscription_service: PushSubscriptionService) -> None:
        self.push_subscription_service = push_subscription_service

    async def execute(
        self, request: ToggleSubscriptionRequest
    ) -> ToggleSubscriptionResponse:
        """Execute toggle flow.

        Raises:
            NotFoundError: If the device has no subscription
        """
        subscription = await self.push_subscription_service.toggle_subscription(
            ActorId(UUID(request.actor_id)), request.device_id, request.enabled
        )
        return ToggleSubscriptionResponse(
            subscription=PushSubscriptionView.from_subscription(subscription)
        )


class ListSubscriptionsRequest(BaseModel):
    """List push subscriptions request."""

    actor_id: str


class ListSubscriptionsResponse(BaseModel):
    """List push subscriptions response."""

    subscriptions: List[PushSubscriptionView]


class ListSubscriptionsUseCase:
    """Use case for listing the actor's devices."""

    def __init__(self, push_subscription_service: PushSubscriptionService) -> None:
        self.push_subscription_service = push_subscription_service

    async def execute(self, request: ListSubscriptionsRequest) -> ListSubscriptionsResponse:
        subscriptions = await self.push_subscription_service.list_subscriptions(
            ActorId(UUID(request.actor_id))
        )
        return ListSubscriptionsResponse(
            subscriptions=[PushSubscriptionView.from_subscription(s) for s in subscriptions]
        )

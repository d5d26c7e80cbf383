"""Save push subscription use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from board.domain.service import PushSubscriptionService, RateLimiter
from board.domain.service.push_subscription_service import validate_subscription
from board.domain.value import ActorId, RateLimitKind


class PushKeysPayload(BaseModel):
    """Keys from the browser's PushSubscription.toJSON()."""

    p256dh: str
    auth: str


class SaveSubscriptionRequest(BaseModel):
    """Save push subscription request."""

    actor_id: str  # Actor ID from the session token
    device_id: str
    endpoint: str
    keys: PushKeysPayload
    user_agent: Optional[str] = None


class SaveSubscriptionResponse(BaseModel):
    """Save push subscription response."""

    subscription_id: str


class SaveSubscriptionUseCase:
    """Use case for registering or refreshing a device for Web Push."""

    def __init__(
        self,
        push_subscription_service: PushSubscriptionService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize save subscription use case.

        Args:
            push_subscription_service: Push subscription domain service
            rate_limiter: Per-actor rate limiter
        """
        self.push_subscription_service = push_subscription_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: SaveSubscriptionRequest) -> SaveSubscriptionResponse:
        """Execute save subscription flow.

        Saving the same device again keeps the subscription id.

        Raises:
            ValidationError: If the endpoint or keys are invalid
            RateLimitError: If the actor is re-subscribing too fast
        """
        validate_subscription(
            request.device_id, request.endpoint, request.keys.p256dh, request.keys.auth
        )
        actor_id = ActorId(UUID(request.actor_id))
        await self.rate_limiter.check_and_record(actor_id, RateLimitKind.SUBSCRIPTION)

        subscription = await self.push_subscription_service.save_subscription(
            actor_id=actor_id,
            device_id=request.device_id,
            endpoint=request.endpoint,
            p256dh=request.keys.p256dh,
            auth=request.keys.auth,
            user_agent=request.user_agent,
        )
        return SaveSubscriptionResponse(subscription_id=str(subscription.id))

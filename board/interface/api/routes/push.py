"""Web Push subscription routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, Field

from board.application.usecase.push import (
    ListSubscriptionsRequest,
    ListSubscriptionsResponse,
    ListSubscriptionsUseCase,
    PushKeysPayload,
    RemoveSubscriptionRequest,
    RemoveSubscriptionResponse,
    RemoveSubscriptionUseCase,
    SaveSubscriptionRequest,
    SaveSubscriptionResponse,
    SaveSubscriptionUseCase,
    ToggleSubscriptionRequest,
    ToggleSubscriptionResponse,
    ToggleSubscriptionUseCase,
)
from board.config import PushSettings
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.interface.api.session import require_actor_id
from board.interface.error import to_http_exception

router = APIRouter(prefix="/push", tags=["push"], route_class=DishkaRoute)


class SaveSubscriptionAPIRequest(BaseModel):
    """Browser PushSubscription plus the device it belongs to."""

    device_id: str = Field(min_length=1, max_length=255)
    endpoint: str
    keys: PushKeysPayload


class ToggleSubscriptionAPIRequest(BaseModel):
    """API request for pausing or resuming a device."""

    enabled: bool


class VapidPublicKeyResponse(BaseModel):
    """Application server key for PushManager.subscribe()."""

    public_key: str


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
async def get_vapid_public_key(
    settings: FromDishka[PushSettings],
) -> VapidPublicKeyResponse:
    """Return the VAPID public key clients subscribe with."""
    return VapidPublicKeyResponse(public_key=settings.vapid_public_key)


@router.put("/subscriptions", response_model=SaveSubscriptionResponse)
async def save_subscription(
    request: SaveSubscriptionAPIRequest,
    save_subscription_use_case: FromDishka[SaveSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    user_agent: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> SaveSubscriptionResponse:
    """Register or refresh this device's push subscription.

    Saving again for the same device replaces the endpoint and keys and
    re-enables the subscription.

    Args:
        request: Subscription payload
        save_subscription_use_case: Save subscription use case from DI
        jwt_service: JWT service for token verification
        user_agent: Browser user agent, stored for the device list
        auth_token: JWT token from cookie
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await save_subscription_use_case.execute(
            SaveSubscriptionRequest(
                actor_id=actor_id,
                device_id=request.device_id,
                endpoint=request.endpoint,
                keys=request.keys,
                user_agent=user_agent,
            )
        )
    except DomainError as e:
        logfire.warn("Push subscription rejected", actor_id=actor_id, error=str(e))
        raise to_http_exception(e)


@router.get("/subscriptions", response_model=ListSubscriptionsResponse)
async def list_subscriptions(
    list_subscriptions_use_case: FromDishka[ListSubscriptionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListSubscriptionsResponse:
    """List the actor's subscribed devices. Keys are never returned."""
    actor_id = require_actor_id(auth_token, jwt_service)
    return await list_subscriptions_use_case.execute(
        ListSubscriptionsRequest(actor_id=actor_id)
    )


@router.patch("/subscriptions/{device_id}", response_model=ToggleSubscriptionResponse)
async def toggle_subscription(
    device_id: str,
    request: ToggleSubscriptionAPIRequest,
    toggle_subscription_use_case: FromDishka[ToggleSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleSubscriptionResponse:
    """Pause or resume pushes to a device."""
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await toggle_subscription_use_case.execute(
            ToggleSubscriptionRequest(
                actor_id=actor_id, device_id=device_id, enabled=request.enabled
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/subscriptions/{device_id}", response_model=RemoveSubscriptionResponse)
async def remove_subscription(
    device_id: str,
    remove_subscription_use_case: FromDishka[RemoveSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemoveSubscriptionResponse:
    """Unsubscribe a device. Removing twice is not an error."""
    actor_id = require_actor_id(auth_token, jwt_service)
    return await remove_subscription_use_case.execute(
        RemoveSubscriptionRequest(actor_id=actor_id, device_id=device_id)
    )

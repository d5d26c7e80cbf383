"""Push subscription use cases."""

from .manage_subscriptions import (
    ListSubscriptionsRequest,
    ListSubscriptionsResponse,
    ListSubscriptionsUseCase,
    RemoveSubscriptionRequest,
    RemoveSubscriptionResponse,
    RemoveSubscriptionUseCase,
    ToggleSubscriptionRequest,
    ToggleSubscriptionResponse,
    ToggleSubscriptionUseCase,
)
from .save_subscription import (
    PushKeysPayload,
    SaveSubscriptionRequest,
    SaveSubscriptionResponse,
    SaveSubscriptionUseCase,
)

__all__ = [
    "ListSubscriptionsRequest",
    "ListSubscriptionsResponse",
    "ListSubscriptionsUseCase",
    "PushKeysPayload",
    "RemoveSubscriptionRequest",
    "RemoveSubscriptionResponse",
    "RemoveSubscriptionUseCase",
    "SaveSubscriptionRequest",
    "SaveSubscriptionResponse",
    "SaveSubscriptionUseCase",
    "ToggleSubscriptionRequest",
    "ToggleSubscriptionResponse",
    "ToggleSubscriptionUseCase",
]

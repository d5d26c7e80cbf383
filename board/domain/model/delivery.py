"""Push delivery models."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from board.domain.model.common import DomainModel
from board.domain.value import (
    ActorId,
    DeliveryLogId,
    DeliveryStatus,
    NotificationId,
    PushSubscriptionId,
)


class PushMessage(DomainModel):
    """Rendered push payload, serialized as JSON for the service worker."""

    title: str
    body: str
    icon: str
    badge: str
    tag: str
    data: dict[str, Any] = Field(default_factory=dict)


class DeliveryAttempt(DomainModel):
    """Outcome reported by a push sender for one subscription."""

    status: DeliveryStatus
    status_code: Optional[int] = None
    error: Optional[str] = None


class DeliveryLogEntry(DomainModel):
    """Append-only record of a single delivery attempt."""

    id: DeliveryLogId
    notification_id: NotificationId
    recipient_id: ActorId
    # Not a foreign key: gone subscriptions are deleted but their log stays
    subscription_id: PushSubscriptionId
    status: DeliveryStatus
    status_code: Optional[int] = None
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DeliveryResult(DomainModel):
    """Aggregate outcome of delivering one notification."""

    sent: int = 0
    failed: int = 0
    total: int = 0

"""Push subscription entity."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from board.domain.model.common import DomainModel
from board.domain.value import ActorId, PushSubscriptionId


class PushSubscription(DomainModel):
    """Per-device Web Push registration.

    Unique per (actor_id, device_id). Removed automatically when the push
    service reports the endpoint as gone.
    """

    id: PushSubscriptionId
    actor_id: ActorId
    device_id: str = Field(min_length=1, max_length=255)
    endpoint: str = Field(min_length=1, max_length=2048)
    keys_p256dh: str = Field(min_length=1)
    keys_auth: str = Field(min_length=1)
    user_agent: Optional[str] = None
    enabled: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

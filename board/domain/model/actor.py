"""Actor aggregate root.

Actors are anonymous identities bound one-to-one to a device. Each actor
carries a transit line label that is assigned once and never changes.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from board.domain.model.common import DomainModel
from board.domain.value import ActorId, Line


class Actor(DomainModel):
    """Actor aggregate root.

    Business rules:
    - One actor per device
    - Line is immutable once assigned
    - Admin capability lives on the stored row, never in the session token
    """

    id: ActorId
    device_id: str = Field(min_length=1, max_length=255)
    line: Line
    is_admin: bool = False
    posts_today: int = Field(default=0, ge=0)
    last_post_at: Optional[datetime] = None
    last_seen_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

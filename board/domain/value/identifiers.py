"""Strongly typed identifiers for board domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
ActorId = NewType("ActorId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
NotificationId = NewType("NotificationId", UUID)
PushSubscriptionId = NewType("PushSubscriptionId", UUID)
DeliveryLogId = NewType("DeliveryLogId", UUID)

"""Domain value objects for the board.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from board.domain.value.common import RootValueObject, ValueObject


class Line(str, Enum):
    """Transit line label.

    Assigned to an actor once and copied onto everything they write.
    """

    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    J = "J"
    L = "L"
    M = "M"
    N = "N"
    Q = "Q"
    R = "R"
    W = "W"
    Z = "Z"
    T = "T"


class LineGroup(str, Enum):
    """Color groups of lines, used as feed filter shortcuts."""

    BLUE = "blue"
    ORANGE = "orange"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    TURQUOISE = "turquoise"
    LIME = "lime"
    GRAY = "gray"
    BROWN = "brown"

    @property
    def lines(self) -> frozenset[Line]:
        """Lines that belong to this group."""
        return _LINE_GROUPS[self]


_LINE_GROUPS: dict[LineGroup, frozenset[Line]] = {
    LineGroup.BLUE: frozenset({Line.A, Line.C, Line.E}),
    LineGroup.ORANGE: frozenset({Line.B, Line.D, Line.F, Line.M}),
    LineGroup.YELLOW: frozenset({Line.N, Line.Q, Line.R, Line.W}),
    LineGroup.RED: frozenset({Line.ONE, Line.TWO, Line.THREE}),
    LineGroup.GREEN: frozenset({Line.FOUR, Line.FIVE, Line.SIX}),
    LineGroup.PURPLE: frozenset({Line.SEVEN}),
    LineGroup.TURQUOISE: frozenset({Line.T}),
    LineGroup.LIME: frozenset({Line.G}),
    LineGroup.GRAY: frozenset({Line.L}),
    LineGroup.BROWN: frozenset({Line.J, Line.Z}),
}


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(int, Enum):
    """Value cast by an actor. NONE retracts an existing vote."""

    DOWN = -1
    NONE = 0
    UP = 1


class DeletionReason(str, Enum):
    """Why a content item was soft-deleted."""

    AUTO_LOW_SCORE = "auto_low_score"
    USER_DELETED = "user_deleted"
    ADMIN_DELETED = "admin_deleted"


class RateLimitKind(str, Enum):
    """Action kinds tracked by the rate limiter."""

    POST = "post"
    COMMENT = "comment"
    VOTE = "vote"
    SUBSCRIPTION = "subscription"


class FeedKind(str, Enum):
    """Feed orderings."""

    HOT = "hot"
    NEW = "new"


class NotificationType(str, Enum):
    """Notification types."""

    REPLY_TO_POST = "reply_to_post"
    REPLY_TO_COMMENT = "reply_to_comment"
    MILESTONE_5 = "milestone_5"
    MILESTONE_10 = "milestone_10"
    MILESTONE_25 = "milestone_25"

    @property
    def is_milestone(self) -> bool:
        """Whether this is a score milestone notification."""
        return self.value.startswith("milestone_")

    @property
    def milestone(self) -> int | None:
        """Threshold for milestone types, None for replies."""
        if not self.is_milestone:
            return None
        return int(self.value.removeprefix("milestone_"))

    @classmethod
    def for_milestone(cls, threshold: int) -> "NotificationType":
        """Look up the milestone type for a threshold.

        Raises:
            ValueError: If no type exists for the threshold
        """
        return cls(f"milestone_{threshold}")


class DeliveryStatus(str, Enum):
    """Outcome of a single push delivery attempt."""

    SENT = "sent"
    GONE = "gone"
    FAILED = "failed"


class Content(RootValueObject[str]):
    """Post or comment body.

    Must be 1-500 characters and not only whitespace.
    """

    @field_validator("root")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Validate content length."""
        if not v.strip():
            raise ValueError("Content cannot be empty")
        if len(v) > 500:
            raise ValueError("Content cannot exceed 500 characters")
        return v


class DeviceId(RootValueObject[str]):
    """Opaque device identifier supplied by the client."""

    @field_validator("root")
    @classmethod
    def validate_device_id(cls, v: str) -> str:
        """Validate device id is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Device ID must be 1-255 characters")
        return v


_ENDPOINT_PATTERN = re.compile(r"^https://[^\s/]+(/\S*)?$")


class PushEndpoint(RootValueObject[str]):
    """Push service endpoint URL."""

    @field_validator("root")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate endpoint is an https URL."""
        if len(v) > 2048:
            raise ValueError("Endpoint must be at most 2048 characters")
        if not _ENDPOINT_PATTERN.match(v):
            raise ValueError("Endpoint must be an https URL")
        return v


class PushKeys(ValueObject):
    """Client encryption keys from PushSubscription.toJSON()."""

    p256dh: str
    auth: str

    @field_validator("p256dh", "auth")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate key is present."""
        if not v:
            raise ValueError("Push subscription keys are required")
        return v

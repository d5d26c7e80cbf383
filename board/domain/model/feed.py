"""Feed read models and pagination cursor."""

import base64
from datetime import datetime
from typing import List, Optional, Union

from pydantic import model_validator

from board.domain.model.common import DomainModel
from board.domain.model.post import Post
from board.domain.value import FeedKind, PostId
from board.domain.value.common import ValueObject


class FeedItem(DomainModel):
    """A post on a feed page."""

    post: Post
    hot_score: Optional[float] = None


class FeedPage(DomainModel):
    """One page of a feed."""

    items: List[FeedItem]
    next_cursor: Optional[str] = None


class FeedCursor(ValueObject):
    """Position after the last item of a feed page.

    Serialized as unpadded base64url JSON. Clients treat it as opaque.
    """

    kind: FeedKind
    created_at: datetime
    id: PostId
    score: Optional[int] = None

    @model_validator(mode="after")
    def validate_shape(self) -> "FeedCursor":
        """Hot cursors carry a score, and timestamps are timezone-aware."""
        if self.created_at.tzinfo is None:
            raise ValueError("Cursor timestamp must be timezone-aware")
        if (self.kind == FeedKind.HOT) != (self.score is not None):
            raise ValueError("Only hot cursors carry a score")
        return self

    @classmethod
    def after(cls, kind: FeedKind, post: Post) -> "FeedCursor":
        """Cursor pointing just past a post."""
        return cls(
            kind=kind,
            created_at=post.created_at,
            id=post.id,
            score=post.score if kind == FeedKind.HOT else None,
        )

    def encode(self) -> str:
        raw = self.model_dump_json(exclude_none=True).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @classmethod
    def decode(cls, cursor: str, kind: FeedKind) -> "FeedCursor":
        """Parse a cursor issued for the given feed kind.

        Raises:
            ValueError: If the cursor is malformed or belongs to another feed
        """
        padded = cursor + "=" * (-len(cursor) % 4)
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        parsed = cls.model_validate_json(raw)
        if parsed.kind != kind:
            raise ValueError(f"Cursor is for the {parsed.kind.value} feed")
        return parsed

    @property
    def key(self) -> Union[tuple[datetime, PostId], tuple[int, datetime, PostId]]:
        """Keyset tuple matching the feed's sort order."""
        if self.kind == FeedKind.HOT:
            if self.score is None:
                raise ValueError("Hot cursor is missing its score")
            return (self.score, self.created_at, self.id)
        return (self.created_at, self.id)

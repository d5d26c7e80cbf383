"""Get feed use case."""

from typing import List, Optional

from pydantic import BaseModel

from board.application.usecase.view import PostView
from board.domain.service import RankEngine
from board.domain.value import FeedKind, Line, LineGroup


class GetFeedRequest(BaseModel):
    """Get feed request."""

    kind: FeedKind
    lines: Optional[List[Line]] = None
    group: Optional[LineGroup] = None
    cursor: Optional[str] = None
    limit: Optional[int] = None  # Defaults to the configured page size


class FeedItemView(BaseModel):
    """Feed entry."""

    post: PostView
    hot_score: Optional[float] = None


class GetFeedResponse(BaseModel):
    """Get feed response."""

    items: List[FeedItemView]
    next_cursor: Optional[str]


class GetFeedUseCase:
    """Use case for paging through the hot or new feed."""

    def __init__(self, rank_engine: RankEngine) -> None:
        """Initialize get feed use case.

        Args:
            rank_engine: Feed ranking service
        """
        self.rank_engine = rank_engine

    async def execute(self, request: GetFeedRequest) -> GetFeedResponse:
        """Execute get feed flow.

        Raises:
            ValidationError: If the limit is out of range
            InvalidCursorError: If the cursor is malformed or for another feed
            FeedTimeoutError: If the query takes too long
        """
        page = await self.rank_engine.get_feed(
            kind=request.kind,
            lines=request.lines,
            group=request.group,
            cursor=request.cursor,
            limit=request.limit,
        )
        return GetFeedResponse(
            items=[
                FeedItemView(post=PostView.from_post(item.post), hot_score=item.hot_score)
                for item in page.items
            ],
            next_cursor=page.next_cursor,
        )

"""Feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from board.application.usecase.feed import (
    GetFeedRequest,
    GetFeedResponse,
    GetFeedUseCase,
)
from board.domain.error import DomainError
from board.domain.value import FeedKind, Line, LineGroup
from board.interface.error import to_http_exception

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)


@router.get("/{kind}", response_model=GetFeedResponse)
async def get_feed(
    kind: FeedKind,
    get_feed_use_case: FromDishka[GetFeedUseCase],
    lines: list[Line] | None = Query(default=None, alias="line"),
    group: LineGroup | None = None,
    cursor: str | None = None,
    limit: int | None = None,
) -> GetFeedResponse:
    """Page through the hot or new feed.

    Repeat ``line`` to filter by several lines. ``group`` adds every line of
    a color group to the filter.

    Args:
        kind: "hot" or "new"
        get_feed_use_case: Feed use case from DI
        lines: Optional line filter
        group: Optional line group filter
        cursor: Opaque cursor from the previous page
        limit: Page size

    Returns:
        Feed page and the cursor for the next one (null on the last page)
    """
    try:
        return await get_feed_use_case.execute(
            GetFeedRequest(
                kind=kind, lines=lines, group=group, cursor=cursor, limit=limit
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

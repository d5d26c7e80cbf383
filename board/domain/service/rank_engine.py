"""Rank engine: hot and new feeds with keyset pagination."""

import asyncio
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Collection, List, Optional

import logfire

from board.config import RankingSettings
from board.domain.error import FeedTimeoutError, InvalidCursorError, ValidationError
from board.domain.model.feed import FeedCursor, FeedItem, FeedPage
from board.domain.model.post import Post
from board.domain.repository import PostRepository
from board.domain.value import FeedKind, Line, LineGroup

from .base import Clock, Service, utcnow


def hot_score(score: int, created_at: datetime, now: datetime, decay: float) -> float:
    """Time-decayed ranking value.

    max(|score|, 1) * max(hours since creation, 1) ** -decay
    """
    hours = (now - created_at).total_seconds() / 3600
    return max(abs(score), 1) * max(hours, 1.0) ** -decay


def resolve_lines(
    lines: Optional[Collection[Line]] = None, group: Optional[LineGroup] = None
) -> Optional[frozenset[Line]]:
    """Combine explicit lines and a color group into one filter.

    Returns:
        The union of both, or None when neither narrows the feed
    """
    if not lines and group is None:
        return None
    selected = set(lines or ())
    if group is not None:
        selected |= group.lines
    return frozenset(selected)


class HotFeedCache:
    """In-process snapshot of the hot window.

    Derived and disposable: posts.score stays authoritative, the snapshot
    is only rebuilt once it is older than the refresh interval.
    """

    def __init__(self) -> None:
        self._posts: List[Post] = []
        self._taken_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

    def is_fresh(self, now: datetime, max_age: timedelta) -> bool:
        return self._taken_at is not None and now - self._taken_at < max_age

    async def get(
        self,
        now: datetime,
        max_age: timedelta,
        loader: Callable[[], Awaitable[List[Post]]],
    ) -> List[Post]:
        """Return the snapshot, rebuilding it with loader when stale."""
        if self.is_fresh(now, max_age):
            return self._posts
        async with self._lock:
            if not self.is_fresh(now, max_age):
                self._posts = await loader()
                self._taken_at = now
                logfire.info("Hot feed snapshot refreshed", posts=len(self._posts))
        return self._posts


class RankEngine(Service):
    """Serves the hot and new feeds.

    New orders non-deleted posts by (created_at, id) descending. Hot keeps
    posts from the last `hot_window_hours` and orders them by raw
    (score, created_at, id) descending so pages stay stable while the
    decaying hot score keeps moving. Both feeds filter on the line stored
    on each post.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        settings: RankingSettings,
        cache: HotFeedCache,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize rank engine.

        Args:
            post_repository: Post repository
            settings: Ranking configuration
            cache: Shared hot feed snapshot (used by the cached strategy)
            clock: Source of the current time
        """
        self.post_repository = post_repository
        self.settings = settings
        self.cache = cache
        self.clock = clock

    async def get_feed(
        self,
        kind: FeedKind,
        lines: Optional[Collection[Line]] = None,
        group: Optional[LineGroup] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> FeedPage:
        """Get one page of a feed.

        Args:
            kind: hot or new
            lines: Only include posts under these lines
            group: Only include posts under this color group (unioned with lines)
            cursor: next_cursor from the previous page
            limit: Page size (defaults to default_page_size)

        Returns:
            Feed page with a cursor for the next page, if any

        Raises:
            ValidationError: If limit is out of range
            InvalidCursorError: If the cursor is malformed or from another feed
            FeedTimeoutError: If the query exceeds its time budget
        """
        if limit is None:
            limit = self.settings.default_page_size
        if not 1 <= limit <= self.settings.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {self.settings.max_page_size}"
            )

        position = None
        if cursor:
            try:
                position = FeedCursor.decode(cursor, kind)
            except ValueError as e:
                logfire.warn("Invalid feed cursor", kind=kind.value, error=str(e))
                raise InvalidCursorError(cursor) from e

        line_filter = resolve_lines(lines, group)
        now = self.clock()

        with logfire.span(
            "rank_engine.get_feed",
            kind=kind.value,
            lines=sorted(line.value for line in line_filter) if line_filter else None,
            limit=limit,
        ):
            try:
                posts = await asyncio.wait_for(
                    self._fetch(kind, line_filter, position, limit + 1, now),
                    timeout=self.settings.query_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                logfire.error(
                    "Feed query timed out",
                    kind=kind.value,
                    timeout=self.settings.query_timeout_seconds,
                )
                raise FeedTimeoutError(f"The {kind.value} feed took too long") from e

        has_more = len(posts) > limit
        posts = posts[:limit]

        items = [
            FeedItem(
                post=post,
                hot_score=(
                    hot_score(post.score, post.created_at, now, self.settings.decay)
                    if kind == FeedKind.HOT
                    else None
                ),
            )
            for post in posts
        ]
        next_cursor = FeedCursor.after(kind, posts[-1]).encode() if has_more else None
        return FeedPage(items=items, next_cursor=next_cursor)

    async def _fetch(
        self,
        kind: FeedKind,
        lines: Optional[frozenset[Line]],
        position: Optional[FeedCursor],
        limit: int,
        now: datetime,
    ) -> List[Post]:
        if kind == FeedKind.NEW:
            return await self.post_repository.find_new(
                lines=lines,
                before=position.key if position else None,  # type: ignore[arg-type]
                limit=limit,
            )

        since = now - timedelta(hours=self.settings.hot_window_hours)
        if self.settings.strategy == "live":
            return await self.post_repository.find_hot(
                since=since,
                lines=lines,
                before=position.key if position else None,  # type: ignore[arg-type]
                limit=limit,
            )

        snapshot = await self.cache.get(
            now,
            timedelta(seconds=self.settings.cache_refresh_seconds),
            lambda: self.post_repository.find_hot(since=since, limit=None),
        )
        page: List[Post] = []
        for post in snapshot:
            if post.created_at < since:
                continue
            if lines is not None and post.line not in lines:
                continue
            if position and (post.score, post.created_at, post.id) >= position.key:
                continue
            page.append(post)
            if len(page) == limit:
                break
        return page

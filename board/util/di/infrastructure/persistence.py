"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from board.application.event import NotificationOutbox
from board.config import Settings
from board.domain.repository import (
    ActorRepository,
    CommentRepository,
    DeliveryLogRepository,
    NotificationRepository,
    PostRepository,
    PushSubscriptionRepository,
    RateLimitRepository,
    VoteRepository,
)
from board.persistence.database import create_engine, create_session_factory
from board.persistence.repository import (
    PostgresActorRepository,
    PostgresCommentRepository,
    PostgresDeliveryLogRepository,
    PostgresNotificationRepository,
    PostgresPostRepository,
    PostgresPushSubscriptionRepository,
    PostgresRateLimitRepository,
    PostgresVoteRepository,
)
from board.util.di.base import ProviderBase
from board.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Repositories and the session they share."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL engine, per-request session and repositories."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Engine shared by every request, traced by logfire."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outbox: NotificationOutbox,
    ) -> AsyncIterator[AsyncSession]:
        """One session and transaction per request.

        Commits when the scope closes cleanly and rolls back otherwise. Taking
        the outbox here makes it finalize after the commit, so events are
        only published for committed work.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed", pending_events=len(outbox.events))
            except Exception as e:
                logfire.warn("Session rolled back", error=str(e))
                await session.rollback()
                raise

    actors = provide(
        PostgresActorRepository, provides=ActorRepository, scope=Scope.REQUEST
    )
    posts = provide(
        PostgresPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    votes = provide(
        PostgresVoteRepository, provides=VoteRepository, scope=Scope.REQUEST
    )
    notifications = provide(
        PostgresNotificationRepository,
        provides=NotificationRepository,
        scope=Scope.REQUEST,
    )
    push_subscriptions = provide(
        PostgresPushSubscriptionRepository,
        provides=PushSubscriptionRepository,
        scope=Scope.REQUEST,
    )
    delivery_log = provide(
        PostgresDeliveryLogRepository,
        provides=DeliveryLogRepository,
        scope=Scope.REQUEST,
    )
    rate_limit_events = provide(
        PostgresRateLimitRepository, provides=RateLimitRepository, scope=Scope.REQUEST
    )

"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from board.config import (
    AuthSettings,
    ModerationSettings,
    NotificationSettings,
    PushSettings,
    RankingSettings,
    RateLimitSettings,
    Settings,
)
from board.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each section is provided on its own so components only see their slice.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        return settings.rate_limits

    @provide
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        return settings.moderation

    @provide
    def provide_ranking_settings(self, settings: Settings) -> RankingSettings:
        return settings.ranking

    @provide
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        return settings.notifications

    @provide
    def provide_push_settings(self, settings: Settings) -> PushSettings:
        return settings.push

"""Web Push infrastructure providers."""

from dishka import Scope, provide

from board.adapter.webpush import RealWebPushSender
from board.config import PushSettings
from board.domain.service import PushSender
from board.util.di.base import ProviderBase


class PushProvider(ProviderBase):
    """Web Push component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production Web Push provider signing with the VAPID key."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_push_sender(self, settings: PushSettings) -> PushSender:
        """Provide the Web Push sender."""
        return RealWebPushSender(
            vapid_private_key=settings.vapid_private_key,
            vapid_subject=settings.vapid_subject,
        )

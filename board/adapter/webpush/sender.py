"""Web Push sender implementation.

Encrypts payloads and signs requests with VAPID using pywebpush.
"""

import asyncio
import json
from typing import Optional

import logfire
from pywebpush import WebPushException, webpush

from board.adapter.error import DeliveryError
from board.domain.model.delivery import DeliveryAttempt, PushMessage
from board.domain.model.push_subscription import PushSubscription
from board.domain.service.push_delivery_worker import PushSender
from board.domain.value import DeliveryStatus


class WebPushSender(PushSender):
    """Base class for Web Push senders.

    Provides type distinction for dependency injection.
    """

    pass


class RealWebPushSender(WebPushSender):
    """Sends messages to browser push services."""

    def __init__(self, vapid_private_key: str, vapid_subject: str) -> None:
        """Initialize sender with VAPID credentials.

        Args:
            vapid_private_key: Application server private key
            vapid_subject: Contact URI (mailto: or https:) sent in VAPID claims
        """
        self.vapid_private_key = vapid_private_key
        self.vapid_subject = vapid_subject

    def _post(
        self, subscription: PushSubscription, message: PushMessage, ttl: int
    ) -> int:
        try:
            response = webpush(
                subscription_info={
                    "endpoint": subscription.endpoint,
                    "keys": {
                        "p256dh": subscription.keys_p256dh,
                        "auth": subscription.keys_auth,
                    },
                },
                data=json.dumps(message.model_dump()),
                vapid_private_key=self.vapid_private_key,
                # pywebpush adds aud/exp to the claims dict, so build one per call
                vapid_claims={"sub": self.vapid_subject},
                ttl=ttl,
            )
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise DeliveryError(str(e), status_code=status_code) from e
        return response.status_code

    async def send(
        self, subscription: PushSubscription, message: PushMessage, ttl: int
    ) -> DeliveryAttempt:
        """Send one message, classifying the push service response."""
        try:
            # pywebpush is blocking, keep it off the event loop
            status_code = await asyncio.to_thread(self._post, subscription, message, ttl)
        except DeliveryError as e:
            status = DeliveryStatus.GONE if e.gone else DeliveryStatus.FAILED
            logfire.warn(
                "Push service rejected message",
                subscription_id=str(subscription.id),
                status_code=e.status_code,
                status=status.value,
            )
            return DeliveryAttempt(
                status=status, status_code=e.status_code, error=str(e)
            )
        return DeliveryAttempt(status=DeliveryStatus.SENT, status_code=status_code)


class MockWebPushSender(WebPushSender):
    """Mock Web Push sender for testing.

    Records every send and returns SENT unless an outcome was scripted for
    the subscription endpoint.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[PushSubscription, PushMessage]] = []
        self.outcomes: dict[str, DeliveryAttempt] = {}
        self.delay: Optional[float] = None

    def script(self, endpoint: str, status: DeliveryStatus, status_code: int) -> None:
        """Make sends to an endpoint return a fixed outcome."""
        self.outcomes[endpoint] = DeliveryAttempt(
            status=status, status_code=status_code
        )

    async def send(
        self, subscription: PushSubscription, message: PushMessage, ttl: int
    ) -> DeliveryAttempt:
        """Record the message and return the scripted outcome."""
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        self.sent.append((subscription, message))
        return self.outcomes.get(
            subscription.endpoint,
            DeliveryAttempt(status=DeliveryStatus.SENT, status_code=201),
        )

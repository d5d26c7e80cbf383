"""Unit tests for Web Push senders."""

from types import SimpleNamespace
from uuid import uuid4

import pytest
from pywebpush import WebPushException

from board.adapter.error import DeliveryError
from board.adapter.webpush import MockWebPushSender, RealWebPushSender
from board.domain.model.delivery import PushMessage
from board.domain.model.push_subscription import PushSubscription
from board.domain.value import ActorId, DeliveryStatus, PushSubscriptionId


def make_subscription(endpoint: str = "https://push.example.com/abc") -> PushSubscription:
    return PushSubscription(
        id=PushSubscriptionId(uuid4()),
        actor_id=ActorId(uuid4()),
        device_id="phone",
        endpoint=endpoint,
        keys_p256dh="p256dh-key",
        keys_auth="auth-secret",
    )


MESSAGE = PushMessage(
    title="A Line replied to your post",
    body="Same here",
    icon="/icon-192.png",
    badge="/icon-192.png",
    tag="n-1",
)


class TestMockWebPushSender:
    """Tests for the recording sender."""

    @pytest.mark.asyncio
    async def test_records_and_succeeds_by_default(self):
        sender = MockWebPushSender()
        subscription = make_subscription()

        attempt = await sender.send(subscription, MESSAGE, ttl=60)

        assert attempt.status == DeliveryStatus.SENT
        assert attempt.status_code == 201
        assert sender.sent == [(subscription, MESSAGE)]

    @pytest.mark.asyncio
    async def test_scripted_outcome(self):
        sender = MockWebPushSender()
        subscription = make_subscription()
        sender.script(subscription.endpoint, DeliveryStatus.GONE, 410)

        attempt = await sender.send(subscription, MESSAGE, ttl=60)

        assert attempt.status == DeliveryStatus.GONE
        assert attempt.status_code == 410


class TestRealWebPushSender:
    """Tests for response classification in the pywebpush sender."""

    @pytest.mark.asyncio
    async def test_success(self, monkeypatch):
        """A 201 from the push service is a successful send."""
        sender = RealWebPushSender(vapid_private_key="key", vapid_subject="mailto:a@b.c")
        monkeypatch.setattr(sender, "_post", lambda subscription, message, ttl: 201)

        attempt = await sender.send(make_subscription(), MESSAGE, ttl=60)

        assert attempt.status == DeliveryStatus.SENT
        assert attempt.status_code == 201

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,expected",
        [
            (404, DeliveryStatus.GONE),
            (410, DeliveryStatus.GONE),
            (413, DeliveryStatus.FAILED),
            (500, DeliveryStatus.FAILED),
            (None, DeliveryStatus.FAILED),
        ],
    )
    async def test_rejections_are_classified(self, monkeypatch, status_code, expected):
        """404 and 410 mean the endpoint is gone, anything else is a failure."""

        def reject(subscription, message, ttl):
            raise DeliveryError("Push failed", status_code=status_code)

        sender = RealWebPushSender(vapid_private_key="key", vapid_subject="mailto:a@b.c")
        monkeypatch.setattr(sender, "_post", reject)

        attempt = await sender.send(make_subscription(), MESSAGE, ttl=60)

        assert attempt.status == expected
        assert attempt.status_code == status_code
        assert attempt.error == "Push failed"

    def test_post_wraps_webpush_exception(self, monkeypatch):
        """pywebpush errors surface as DeliveryError with the response status."""

        def fake_webpush(**kwargs):
            raise WebPushException(
                "Push failed: 410 Gone", response=SimpleNamespace(status_code=410)
            )

        monkeypatch.setattr("board.adapter.webpush.sender.webpush", fake_webpush)
        sender = RealWebPushSender(vapid_private_key="key", vapid_subject="mailto:a@b.c")

        with pytest.raises(DeliveryError) as exc_info:
            sender._post(make_subscription(), MESSAGE, 60)

        assert exc_info.value.gone

    def test_post_sends_claims_and_ttl(self, monkeypatch):
        """Each call passes the subscription keys, VAPID claims and TTL."""
        calls = []

        def fake_webpush(**kwargs):
            calls.append(kwargs)
            return SimpleNamespace(status_code=201)

        monkeypatch.setattr("board.adapter.webpush.sender.webpush", fake_webpush)
        sender = RealWebPushSender(vapid_private_key="key", vapid_subject="mailto:a@b.c")
        subscription = make_subscription()

        status_code = sender._post(subscription, MESSAGE, 3600)

        assert status_code == 201
        (call,) = calls
        assert call["subscription_info"]["endpoint"] == subscription.endpoint
        assert call["subscription_info"]["keys"]["auth"] == "auth-secret"
        assert call["vapid_claims"] == {"sub": "mailto:a@b.c"}
        assert call["ttl"] == 3600

"""End-to-end test for push delivery after a write commits."""

from fastapi.testclient import TestClient

from board.domain.service import PushSender
from board.interface.api.app import create_app
from board.util.di.container import setup_di
from tests.di import build_test_container


class TestPushDelivery:
    """Notifications reach subscribed devices through the event bus."""

    def test_reply_is_pushed_to_author_devices(self):
        """A comment on a post is pushed to every enabled device of its author."""
        # Arrange
        app_instance = create_app()
        test_container = build_test_container()
        setup_di(app_instance, test_container)

        # Entering the client runs the lifespan, which subscribes the push worker
        with TestClient(app_instance) as client:
            sender = client.portal.call(test_container.get, PushSender)

            author = client.post("/actors/session", json={"device_id": "author-phone"})
            author_token = author.cookies["auth_token"]
            replier = client.post(
                "/actors/session", json={"device_id": "replier", "line": "J"}
            )
            replier_token = replier.cookies["auth_token"]
            client.cookies.clear()

            for device in ("phone", "laptop"):
                client.put(
                    "/push/subscriptions",
                    json={
                        "device_id": device,
                        "endpoint": f"https://push.example.com/{device}",
                        "keys": {"p256dh": "p256dh-key", "auth": "auth-secret"},
                    },
                    cookies={"auth_token": author_token},
                )
            post = client.post(
                "/posts",
                json={"content": "Anyone else stuck at Myrtle?"},
                cookies={"auth_token": author_token},
            ).json()["post"]

            # Act
            response = client.post(
                f"/posts/{post['post_id']}/comments",
                json={"content": "Yes, 20 minutes now"},
                cookies={"auth_token": replier_token},
            )

        # Leaving the client drains in-flight deliveries

        # Assert
        assert response.status_code == 201
        assert {sub.device_id for sub, _ in sender.sent} == {"phone", "laptop"}
        _, message = sender.sent[0]
        assert message.title == "J Line replied to your post"
        assert message.body == "Yes, 20 minutes now"
        assert message.data["url"] == f"/thread/{post['post_id']}"

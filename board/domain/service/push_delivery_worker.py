"""Push delivery worker.

Turns a NotificationCreated event into Web Push messages for every enabled
device of the recipient. Delivery is best effort: each attempt is logged,
gone endpoints are removed, and nothing is ever raised to the caller.
"""

import asyncio
from datetime import timedelta
from uuid import uuid4

import logfire

from board.config import PushSettings
from board.domain.model.delivery import (
    DeliveryAttempt,
    DeliveryLogEntry,
    DeliveryResult,
    PushMessage,
)
from board.domain.model.event import NotificationCreated
from board.domain.model.notification import Notification
from board.domain.model.push_subscription import PushSubscription
from board.domain.repository import DeliveryLogRepository, PushSubscriptionRepository
from board.domain.value import DeliveryLogId, DeliveryStatus, NotificationType

from .base import Clock, Service, utcnow

REPLY_TITLES = {
    NotificationType.REPLY_TO_POST: "{line} Line replied to your post",
    NotificationType.REPLY_TO_COMMENT: "{line} Line replied to your comment",
}
MILESTONE_TITLE = "Your post reached {milestone} upvotes!"
DEFAULT_BODY = "You have a new reply"


class PushSender:
    """Generic Web Push transport interface."""

    async def send(
        self, subscription: PushSubscription, message: PushMessage, ttl: int
    ) -> DeliveryAttempt:
        """Deliver one message to one subscription.

        Args:
            subscription: Target device registration
            message: Payload to encrypt and send
            ttl: Seconds the push service may hold the message

        Returns:
            Classified outcome (sent, gone or failed)
        """
        raise NotImplementedError


def _printable(text: str) -> str:
    """Drop control characters, turning line breaks into spaces."""
    return "".join(
        ch if ch.isprintable() else " " if ch.isspace() else "" for ch in text
    ).strip()


def build_push_message(notification: Notification, settings: PushSettings) -> PushMessage:
    """Render a notification into a push payload from fixed templates."""
    if notification.type.is_milestone:
        title = MILESTONE_TITLE.format(milestone=notification.type.milestone)
    else:
        line = notification.actor_line.value if notification.actor_line else "Someone"
        title = REPLY_TITLES[notification.type].format(line=line)

    body = _printable(notification.preview or "") or DEFAULT_BODY
    post_id = str(notification.post_id)
    return PushMessage(
        title=_printable(title),
        body=body,
        icon=settings.icon,
        badge=settings.badge,
        tag=str(notification.id),
        data={
            "postId": post_id,
            "commentId": str(notification.comment_id) if notification.comment_id else None,
            "notificationId": str(notification.id),
            "url": f"/thread/{post_id}",
        },
    )


class PushDeliveryWorker(Service):
    """Fans a notification out to the recipient's devices."""

    def __init__(
        self,
        push_subscription_repository: PushSubscriptionRepository,
        delivery_log_repository: DeliveryLogRepository,
        sender: PushSender,
        settings: PushSettings,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize push delivery worker.

        Args:
            push_subscription_repository: Push subscription repository
            delivery_log_repository: Delivery log repository
            sender: Web Push transport
            settings: Push configuration (timeouts, fan-out bound, TTL)
            clock: Source of the current time
        """
        self.push_subscription_repository = push_subscription_repository
        self.delivery_log_repository = delivery_log_repository
        self.sender = sender
        self.settings = settings
        self.clock = clock

    async def deliver(self, event: NotificationCreated) -> DeliveryResult:
        """Deliver a notification to every enabled subscription.

        Attempts run concurrently, bounded by max_concurrency, and each has
        its own timeout so one slow endpoint cannot hold up the others.

        Args:
            event: The notification to deliver

        Returns:
            Counts of sent, failed and total attempts
        """
        notification = event.notification
        with logfire.span(
            "push_delivery_worker.deliver",
            notification_id=str(notification.id),
            recipient_id=str(notification.recipient_id),
        ):
            try:
                subscriptions = await self.push_subscription_repository.find_by_actor(
                    notification.recipient_id, enabled_only=True
                )
            except Exception as e:
                logfire.error(
                    "Failed to load push subscriptions",
                    notification_id=str(notification.id),
                    error=str(e),
                )
                return DeliveryResult()

            if not subscriptions:
                logfire.info(
                    "No push subscriptions for recipient",
                    recipient_id=str(notification.recipient_id),
                )
                return DeliveryResult()

            message = build_push_message(notification, self.settings)
            semaphore = asyncio.Semaphore(self.settings.max_concurrency)

            async def bounded(subscription: PushSubscription) -> DeliveryAttempt:
                async with semaphore:
                    return await self._attempt(subscription, message)

            attempts = await asyncio.gather(*(bounded(s) for s in subscriptions))

            for subscription, attempt in zip(subscriptions, attempts):
                await self._record(notification, subscription, attempt)

            sent = sum(1 for a in attempts if a.status == DeliveryStatus.SENT)
            result = DeliveryResult(
                sent=sent, failed=len(attempts) - sent, total=len(attempts)
            )
            logfire.info(
                "Push delivery finished",
                notification_id=str(notification.id),
                sent=result.sent,
                failed=result.failed,
                total=result.total,
            )
            return result

    async def _attempt(
        self, subscription: PushSubscription, message: PushMessage
    ) -> DeliveryAttempt:
        try:
            return await asyncio.wait_for(
                self.sender.send(subscription, message, self.settings.ttl_seconds),
                timeout=self.settings.attempt_timeout_seconds,
            )
        except asyncio.TimeoutError:
            return DeliveryAttempt(
                status=DeliveryStatus.FAILED,
                error=f"Timed out after {self.settings.attempt_timeout_seconds}s",
            )
        except Exception as e:
            return DeliveryAttempt(status=DeliveryStatus.FAILED, error=str(e) or type(e).__name__)

    async def _record(
        self,
        notification: Notification,
        subscription: PushSubscription,
        attempt: DeliveryAttempt,
    ) -> None:
        logfire.info(
            "Push delivery attempt",
            notification_id=str(notification.id),
            subscription_id=str(subscription.id),
            status=attempt.status.value,
            status_code=attempt.status_code,
            error=attempt.error,
        )
        try:
            await self.delivery_log_repository.append(
                DeliveryLogEntry(
                    id=DeliveryLogId(uuid4()),
                    notification_id=notification.id,
                    recipient_id=notification.recipient_id,
                    subscription_id=subscription.id,
                    status=attempt.status,
                    status_code=attempt.status_code,
                    error=attempt.error,
                    created_at=self.clock(),
                )
            )
        except Exception as e:
            logfire.error(
                "Failed to log push delivery",
                subscription_id=str(subscription.id),
                error=str(e),
            )

        # Gone endpoints are removed whether or not the log write succeeded
        if attempt.status != DeliveryStatus.GONE:
            return
        try:
            await self.push_subscription_repository.delete(subscription.id)
        except Exception as e:
            logfire.error(
                "Failed to remove gone push subscription",
                subscription_id=str(subscription.id),
                error=str(e),
            )
            return
        logfire.info(
            "Removed gone push subscription",
            subscription_id=str(subscription.id),
            status_code=attempt.status_code,
        )

    async def prune_log(self, retention_days: int | None = None) -> int:
        """Delete delivery log entries older than the retention period.

        Returns:
            Number of entries deleted
        """
        days = self.settings.log_retention_days if retention_days is None else retention_days
        deleted = await self.delivery_log_repository.delete_before(
            self.clock() - timedelta(days=days)
        )
        logfire.info("Delivery log pruned", deleted=deleted, retention_days=days)
        return deleted

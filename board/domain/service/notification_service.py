"""Notification dispatcher and inbox operations."""

from datetime import timedelta
from typing import List, Optional
from uuid import uuid4

import logfire

from board.config import NotificationSettings
from board.domain.error import AuthorizationError, NotFoundError, ValidationError
from board.domain.model.comment import Comment
from board.domain.model.event import NotificationCreated, ScoreChange
from board.domain.model.notification import Notification
from board.domain.model.post import Post
from board.domain.repository import (
    CommentRepository,
    NotificationRepository,
    PostRepository,
)
from board.domain.value import ActorId, NotificationId, NotificationType

from .base import Clock, Service, utcnow


class NotificationService(Service):
    """Creates reply and milestone notifications and serves the inbox.

    Notification rows are written inside the triggering transaction. Each
    new row is returned as a NotificationCreated event for push delivery
    once that transaction commits.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        settings: NotificationSettings,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            post_repository: Post repository (reply recipients)
            comment_repository: Comment repository (reply recipients)
            settings: Milestones, preview length and paging limits
            clock: Source of the current time
        """
        self.notification_repository = notification_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.settings = settings
        self.clock = clock

    async def notify_reply(self, comment: Comment) -> Optional[NotificationCreated]:
        """Notify the author of whatever a new comment replies to.

        Top-level comments notify the post author; replies notify the
        parent comment's author. Nobody is notified about their own reply.

        Args:
            comment: The comment just created

        Returns:
            The event for the new notification, or None if none was created
        """
        with logfire.span("notification_service.notify_reply", comment_id=str(comment.id)):
            if comment.parent_id is None:
                notification_type = NotificationType.REPLY_TO_POST
                parent = await self.post_repository.find_by_id(comment.post_id)
            else:
                notification_type = NotificationType.REPLY_TO_COMMENT
                parent = await self.comment_repository.find_by_id(comment.parent_id)

            if not parent:
                raise NotFoundError("Reply target", str(comment.parent_id or comment.post_id))
            if parent.author_id == comment.author_id:
                return None

            notification = await self.notification_repository.save(
                Notification(
                    id=NotificationId(uuid4()),
                    recipient_id=parent.author_id,
                    type=notification_type,
                    post_id=comment.post_id,
                    comment_id=comment.id,
                    actor_id=comment.author_id,
                    actor_line=comment.line,
                    preview=comment.content[: self.settings.preview_length],
                    created_at=self.clock(),
                )
            )
            logfire.info(
                "Notification created",
                notification_id=str(notification.id),
                type=notification.type.value,
                recipient_id=str(notification.recipient_id),
            )
            return NotificationCreated(notification=notification)

    async def notify_milestones(
        self, post: Post, change: ScoreChange
    ) -> List[NotificationCreated]:
        """Notify a post author of every milestone the score just reached.

        Each (author, post, milestone) is notified at most once, ever, so a
        score bouncing around a threshold does not repeat it.

        Args:
            post: The post whose score changed
            change: Score transition from the aggregator

        Returns:
            Events for the notifications created
        """
        events: List[NotificationCreated] = []
        if not change.increased:
            return events

        for threshold in sorted(self.settings.milestones):
            if not change.previous_score < threshold <= change.score:
                continue
            notification_type = NotificationType.for_milestone(threshold)
            if await self.notification_repository.milestone_exists(
                post.author_id, post.id, notification_type
            ):
                continue

            notification = await self.notification_repository.save(
                Notification(
                    id=NotificationId(uuid4()),
                    recipient_id=post.author_id,
                    type=notification_type,
                    post_id=post.id,
                    preview=f"Your post reached {threshold} upvotes!",
                    created_at=self.clock(),
                )
            )
            logfire.info(
                "Milestone notification created",
                notification_id=str(notification.id),
                post_id=str(post.id),
                milestone=threshold,
            )
            events.append(NotificationCreated(notification=notification))
        return events

    async def get_notifications(
        self,
        recipient_id: ActorId,
        limit: Optional[int] = None,
        offset: int = 0,
        unread_only: bool = False,
    ) -> List[Notification]:
        """Get a page of the recipient's notifications, newest first.

        Raises:
            ValidationError: If limit or offset is out of range
        """
        if limit is None:
            limit = self.settings.default_page_size
        if not 1 <= limit <= self.settings.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {self.settings.max_page_size}"
            )
        if offset < 0:
            raise ValidationError("Offset must be non-negative")

        return await self.notification_repository.find_by_recipient(
            recipient_id, limit=limit, offset=offset, unread_only=unread_only
        )

    async def count_unread(self, recipient_id: ActorId) -> int:
        return await self.notification_repository.count_unread(recipient_id)

    async def mark_read(
        self, recipient_id: ActorId, notification_id: NotificationId
    ) -> Notification:
        """Mark one of the recipient's notifications read.

        Already-read notifications are returned unchanged.

        Raises:
            NotFoundError: If the notification does not exist
            AuthorizationError: If it belongs to another actor
        """
        notification = await self._get_owned(recipient_id, notification_id, "mark read")
        if notification.read:
            return notification

        now = self.clock()
        await self.notification_repository.mark_read(notification_id, now)
        return notification.model_copy(update={"read": True, "read_at": now})

    async def mark_all_read(self, recipient_id: ActorId) -> int:
        """Mark every unread notification read.

        Returns:
            Number of notifications updated
        """
        updated = await self.notification_repository.mark_all_read(
            recipient_id, self.clock()
        )
        logfire.info(
            "Notifications marked read", recipient_id=str(recipient_id), count=updated
        )
        return updated

    async def delete_notification(
        self, recipient_id: ActorId, notification_id: NotificationId
    ) -> None:
        """Soft-delete one of the recipient's notifications.

        Raises:
            NotFoundError: If the notification does not exist
            AuthorizationError: If it belongs to another actor
        """
        await self._get_owned(recipient_id, notification_id, "delete")
        await self.notification_repository.soft_delete(notification_id, self.clock())

    async def cleanup_old(self, retention_days: Optional[int] = None) -> int:
        """Hard-delete read notifications older than the retention period.

        Args:
            retention_days: Override for settings.retention_days

        Returns:
            Number of notifications deleted
        """
        days = self.settings.retention_days if retention_days is None else retention_days
        cutoff = self.clock() - timedelta(days=days)
        deleted = await self.notification_repository.delete_read_before(cutoff)
        logfire.info("Old notifications cleaned up", deleted=deleted, retention_days=days)
        return deleted

    async def _get_owned(
        self, recipient_id: ActorId, notification_id: NotificationId, action: str
    ) -> Notification:
        notification = await self.notification_repository.find_by_id(notification_id)
        if not notification:
            raise NotFoundError("Notification", str(notification_id))
        if notification.recipient_id != recipient_id:
            raise AuthorizationError(
                action, "notification", str(notification_id), str(recipient_id)
            )
        return notification

"""Create comment use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from board.application.event import NotificationOutbox
from board.application.usecase.view import CommentView
from board.domain.service import (
    ActorService,
    CommentService,
    NotificationService,
    RateLimiter,
)
from board.domain.service.post_service import validate_content
from board.domain.value import ActorId, CommentId, PostId, RateLimitKind


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    actor_id: str  # Actor ID from the session token
    post_id: str  # UUID string
    content: str
    parent_id: Optional[str] = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentView


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a top-level comment."""

    def __init__(
        self,
        actor_service: ActorService,
        comment_service: CommentService,
        notification_service: NotificationService,
        rate_limiter: RateLimiter,
        outbox: NotificationOutbox,
    ) -> None:
        """Initialize create comment use case.

        Args:
            actor_service: Actor domain service
            comment_service: Comment domain service
            notification_service: Notification dispatcher
            rate_limiter: Per-actor rate limiter
            outbox: Events to publish once the request commits
        """
        self.actor_service = actor_service
        self.comment_service = comment_service
        self.notification_service = notification_service
        self.rate_limiter = rate_limiter
        self.outbox = outbox

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Validate content and load the actor
        2. Lock and check the post and parent (existence, deletion, depth)
        3. Check and record the comment rate limit
        4. Create the comment
        5. Notify whoever is being replied to
        6. Queue the notification for push delivery

        Every rejection happens before the quota event is recorded, so a
        refused comment never counts against the actor.

        Raises:
            ValidationError: If the content is invalid
            NotFoundError: If the actor, post or parent does not exist
            ContentDeletedError: If the post or parent is deleted
            MaxDepthExceededError: If the parent is already a reply
            RateLimitError: If the actor is commenting too fast
        """
        content = validate_content(request.content)
        actor = await self.actor_service.get_actor(ActorId(UUID(request.actor_id)))
        post_id = PostId(UUID(request.post_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        depth = await self.comment_service.check_reply_target(post_id, parent_id)
        await self.rate_limiter.check_and_record(actor.id, RateLimitKind.COMMENT)

        comment = await self.comment_service.create_comment(
            author=actor,
            post_id=post_id,
            content=content,
            parent_id=parent_id,
            depth=depth,
        )

        event = await self.notification_service.notify_reply(comment)
        await self.actor_service.touch(actor)

        if event:
            self.outbox.add(event)

        return CreateCommentResponse(comment=CommentView.from_comment(comment))

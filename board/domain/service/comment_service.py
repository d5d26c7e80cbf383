"""Comment domain service."""

from typing import List, Optional
from uuid import uuid4

import logfire

from board.domain.error import (
    ContentDeletedError,
    MaxDepthExceededError,
    NotFoundError,
    ValidationError,
)
from board.domain.model.actor import Actor
from board.domain.model.comment import MAX_COMMENT_DEPTH, Comment
from board.domain.repository import CommentRepository, PostRepository
from board.domain.value import CommentId, PostId

from .base import Clock, Service, utcnow
from .post_service import validate_content


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            clock: Source of the current time
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.clock = clock

    async def check_reply_target(
        self, post_id: PostId, parent_id: Optional[CommentId] = None
    ) -> int:
        """Lock the post (and parent) a new comment would attach to.

        Returns:
            Depth the new comment would have (0 top-level, 1 reply)

        Raises:
            ValidationError: If the parent is on another post
            NotFoundError: If the post or parent does not exist
            ContentDeletedError: If the post or parent is deleted
            MaxDepthExceededError: If the parent is already a reply
        """
        post = await self.post_repository.lock(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        if post.is_deleted:
            raise ContentDeletedError("Post", str(post_id))

        if parent_id is None:
            return 0

        parent = await self.comment_repository.lock(parent_id)
        if not parent:
            raise NotFoundError("Comment", str(parent_id))
        if parent.post_id != post_id:
            raise ValidationError("Parent comment belongs to a different post")
        if parent.is_deleted:
            raise ContentDeletedError("Comment", str(parent_id))
        if parent.depth >= MAX_COMMENT_DEPTH:
            logfire.warn("Reply depth exceeded", parent_id=str(parent_id))
            raise MaxDepthExceededError(str(parent_id))
        return parent.depth + 1

    async def create_comment(
        self,
        author: Actor,
        post_id: PostId,
        content: str,
        parent_id: Optional[CommentId] = None,
        depth: Optional[int] = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Increments the post's comment_count, and the parent's reply_count
        for replies. Callers that already ran check_reply_target in this
        transaction pass the depth it returned; otherwise the check runs here.

        Args:
            author: Commenting actor
            post_id: Post being commented on
            content: Comment body
            parent_id: Comment being replied to (None for top-level)
            depth: Depth from check_reply_target, if already checked

        Returns:
            Created comment

        Raises:
            ValidationError: If the content is invalid or the parent is on another post
            NotFoundError: If the post or parent does not exist
            ContentDeletedError: If the post or parent is deleted
            MaxDepthExceededError: If the parent is already a reply
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = validate_content(content)
            if depth is None:
                depth = await self.check_reply_target(post_id, parent_id)

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author.id,
                line=author.line,
                content=text,
                parent_id=parent_id,
                depth=depth,
                created_at=self.clock(),
            )
            saved = await self.comment_repository.save(comment)

            await self.post_repository.increment_comment_count(post_id)
            if parent_id is not None:
                await self.comment_repository.increment_reply_count(parent_id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_thread_comments(self, post_id: PostId) -> List[Comment]:
        """Get a post's visible comments ordered for two-level rendering.

        Each top-level comment is followed by its replies, oldest first.
        Replies whose parent was deleted are dropped with it.
        """
        comments = await self.comment_repository.find_by_post(post_id)
        replies: dict[CommentId, List[Comment]] = {}
        for comment in comments:
            if comment.parent_id is not None:
                replies.setdefault(comment.parent_id, []).append(comment)

        ordered: List[Comment] = []
        for comment in comments:
            if comment.parent_id is None:
                ordered.append(comment)
                ordered.extend(replies.get(comment.id, []))
        return ordered

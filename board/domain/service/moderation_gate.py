"""Moderation gate: automatic and explicit soft deletion."""

from typing import Union
from uuid import UUID

import logfire

from board.config import ModerationSettings
from board.domain.error import NotFoundError
from board.domain.model.actor import Actor
from board.domain.model.comment import Comment
from board.domain.model.event import ScoreChange
from board.domain.model.post import Post
from board.domain.repository import CommentRepository, PostRepository
from board.domain.value import CommentId, DeletionReason, PostId, VotableType

from .base import Clock, Service, utcnow
from .content_policy import ContentPolicy


class ModerationGate(Service):
    """Soft-deletes content that falls to the deletion threshold.

    Deletion is one-way: a score that recovers never restores an item, and
    an item that is already deleted is left untouched.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        content_policy: ContentPolicy,
        settings: ModerationSettings,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize moderation gate.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            content_policy: Deletion authorization rules
            settings: Deletion threshold
            clock: Source of the current time
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.content_policy = content_policy
        self.settings = settings
        self.clock = clock

    def crosses_threshold(self, change: ScoreChange) -> bool:
        """Whether the score fell from above the threshold to at or below it."""
        threshold = self.settings.deletion_threshold
        return change.previous_score > threshold >= change.score

    async def apply(self, change: ScoreChange, item: Union[Post, Comment]) -> bool:
        """Auto-delete an item whose score just crossed the threshold.

        Args:
            change: Score transition from the aggregator
            item: The item the change applies to

        Returns:
            True if the item is deleted after this call
        """
        if item.is_deleted:
            return True
        if not self.crosses_threshold(change):
            return False

        deleted = await self._soft_delete(
            change.votable_type, change.votable_id, DeletionReason.AUTO_LOW_SCORE
        )
        if deleted:
            logfire.info(
                "Content auto-deleted",
                votable_type=change.votable_type.value,
                votable_id=str(change.votable_id),
                score=change.score,
            )
        return True

    async def delete_content(
        self, actor: Actor, votable_type: VotableType, votable_id: UUID
    ) -> Union[Post, Comment]:
        """Delete an item on behalf of its author or an admin.

        Succeeds whatever the item's score is. Deleting an item that is
        already deleted changes nothing.

        Args:
            actor: Actor requesting the deletion
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The item as it was before the call

        Raises:
            NotFoundError: If the item does not exist
            AuthorizationError: If the actor is neither author nor admin
        """
        with logfire.span(
            "moderation_gate.delete_content",
            actor_id=str(actor.id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            item: Union[Post, Comment, None]
            if votable_type == VotableType.POST:
                item = await self.post_repository.lock(PostId(votable_id))
                resource = "Post"
            else:
                item = await self.comment_repository.lock(CommentId(votable_id))
                resource = "Comment"
            if not item:
                raise NotFoundError(resource, str(votable_id))

            reason = self.content_policy.deletion_reason(
                actor, item.author_id, resource, votable_id
            )
            if item.is_deleted:
                return item

            await self._soft_delete(votable_type, votable_id, reason)
            logfire.info(
                "Content deleted",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                reason=reason.value,
            )
            return item

    async def _soft_delete(
        self, votable_type: VotableType, votable_id: UUID, reason: DeletionReason
    ) -> bool:
        now = self.clock()
        if votable_type == VotableType.POST:
            return await self.post_repository.soft_delete(PostId(votable_id), reason, now)
        return await self.comment_repository.soft_delete(
            CommentId(votable_id), reason, now
        )

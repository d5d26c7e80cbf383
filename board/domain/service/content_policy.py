"""Authorization rules for content operations."""

from uuid import UUID

from board.domain.error import AuthorizationError
from board.domain.model.actor import Actor
from board.domain.value import ActorId, DeletionReason

from .base import Service


class ContentPolicy(Service):
    """Ownership and admin checks for content deletion."""

    def deletion_reason(
        self, actor: Actor, author_id: ActorId, resource: str, resource_id: UUID
    ) -> DeletionReason:
        """Decide whether an actor may delete an item, and record why.

        Args:
            actor: Actor requesting the deletion
            author_id: Author of the item
            resource: Resource name for error messages
            resource_id: ID of the item

        Returns:
            user_deleted for authors, admin_deleted for admins

        Raises:
            AuthorizationError: If the actor is neither author nor admin
        """
        if actor.id == author_id:
            return DeletionReason.USER_DELETED
        if actor.is_admin:
            return DeletionReason.ADMIN_DELETED
        raise AuthorizationError("delete", resource, str(resource_id), str(actor.id))

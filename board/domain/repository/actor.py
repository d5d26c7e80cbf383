"""Actor repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from board.domain.model.actor import Actor
from board.domain.value import ActorId


class ActorRepository(ABC):
    """Repository for Actor aggregate.

    Defines the contract for actor persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, actor_id: ActorId) -> Optional[Actor]:
        """Find an actor by ID.

        Args:
            actor_id: The actor's unique identifier

        Returns:
            The actor if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_device_id(self, device_id: str) -> Optional[Actor]:
        """Find the actor bound to a device.

        Args:
            device_id: Opaque device identifier

        Returns:
            The actor if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_if_absent(self, actor: Actor) -> Actor:
        """Insert an actor unless one already exists for its device.

        Concurrent bootstraps of the same device converge on one row.

        Args:
            actor: The candidate actor

        Returns:
            The stored actor for the device (the candidate or the existing one)
        """
        pass

    @abstractmethod
    async def save(self, actor: Actor) -> Actor:
        """Save an actor (create or update).

        Args:
            actor: The actor to save

        Returns:
            The saved actor
        """
        pass

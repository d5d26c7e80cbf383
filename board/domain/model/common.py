"""Shared base for entities and read models."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen pydantic model.

    Entities are never mutated in place. Services derive changed copies with
    `model_copy(update=...)` and hand them to a repository.
    """

    model_config = ConfigDict(frozen=True)

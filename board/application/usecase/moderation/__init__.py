"""Moderation use cases."""

from .delete_content import (
    DeleteContentRequest,
    DeleteContentResponse,
    DeleteContentUseCase,
)

__all__ = [
    "DeleteContentRequest",
    "DeleteContentResponse",
    "DeleteContentUseCase",
]

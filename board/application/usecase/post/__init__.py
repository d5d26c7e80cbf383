"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
]

"""Post domain service."""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from board.domain.error import NotFoundError, ValidationError
from board.domain.model.actor import Actor
from board.domain.model.post import Post
from board.domain.repository import PostRepository
from board.domain.value import Content, PostId

from .base import Clock, Service, utcnow


def validate_content(content: str) -> str:
    """Trim and validate a post or comment body.

    Raises:
        ValidationError: If the content is blank or longer than 500 characters
    """
    try:
        return Content(content.strip()).root
    except PydanticValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise ValidationError(message) from e


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository, clock: Clock = utcnow) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            clock: Source of the current time
        """
        self.post_repository = post_repository
        self.clock = clock

    async def create_post(self, author: Actor, content: str) -> Post:
        """Create a post under the author's line.

        The line is copied onto the post here and never updated afterwards.

        Args:
            author: Posting actor
            content: Post body

        Returns:
            Created post

        Raises:
            ValidationError: If the content is invalid
        """
        with logfire.span("post_service.create_post", author_id=str(author.id)):
            post = Post(
                id=PostId(uuid4()),
                author_id=author.id,
                line=author.line,
                content=validate_content(content),
                created_at=self.clock(),
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), line=saved.line.value)
            return saved

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID, including soft-deleted posts.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_repository.find_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        return post

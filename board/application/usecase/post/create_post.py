"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.view import PostView
from board.domain.service import ActorService, PostService, RateLimiter
from board.domain.service.post_service import validate_content
from board.domain.value import ActorId, RateLimitKind


class CreatePostRequest(BaseModel):
    """Create post request."""

    actor_id: str  # Actor ID from the session token
    content: str


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: PostView


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(
        self,
        actor_service: ActorService,
        post_service: PostService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize create post use case.

        Args:
            actor_service: Actor domain service
            post_service: Post domain service
            rate_limiter: Per-actor rate limiter
        """
        self.actor_service = actor_service
        self.post_service = post_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Validate content
        2. Load the actor
        3. Check and record the post rate limit
        4. Create the post under the actor's line
        5. Count the post against the actor's daily total

        Args:
            request: Create post request

        Returns:
            The created post

        Raises:
            ValidationError: If the content is invalid
            NotFoundError: If the actor does not exist
            RateLimitError: If the actor is posting too fast
        """
        content = validate_content(request.content)
        actor = await self.actor_service.get_actor(ActorId(UUID(request.actor_id)))

        await self.rate_limiter.check_and_record(actor.id, RateLimitKind.POST)

        post = await self.post_service.create_post(actor, content)
        await self.actor_service.record_post(actor)

        return CreatePostResponse(post=PostView.from_post(post))

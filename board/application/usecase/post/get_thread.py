"""Get thread use case."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.view import CommentView, PostView
from board.domain.error import NotFoundError
from board.domain.service import CommentService, PostService, VoteService
from board.domain.value import ActorId, PostId, VotableType


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str  # UUID string
    actor_id: Optional[str] = None  # Current actor (if authenticated)


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post: PostView
    comments: List[CommentView]
    my_vote: int  # Current actor's vote on the post (0 when anonymous)


class GetThreadUseCase:
    """Use case for reading a post with its comments."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Comments come back in rendering order: each top-level comment is
        followed by its replies.

        Raises:
            NotFoundError: If the post does not exist or is deleted
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post(post_id)
        if post.is_deleted:
            raise NotFoundError("Post", request.post_id)

        comments = await self.comment_service.get_thread_comments(post_id)

        my_vote = 0
        if request.actor_id:
            value = await self.vote_service.get_vote_value(
                ActorId(UUID(request.actor_id)), VotableType.POST, post_id
            )
            my_vote = value.value

        return GetThreadResponse(
            post=PostView.from_post(post),
            comments=[CommentView.from_comment(c) for c in comments],
            my_vote=my_vote,
        )

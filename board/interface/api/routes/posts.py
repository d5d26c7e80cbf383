"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from board.application.usecase.moderation import (
    DeleteContentRequest,
    DeleteContentResponse,
    DeleteContentUseCase,
)
from board.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from board.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.domain.value import VotableType
from board.interface.api.session import optional_actor_id, require_actor_id
from board.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class ContentAPIRequest(BaseModel):
    """API request carrying post or comment text.

    Length rules are enforced by the domain so that every caller gets the
    same 400 response.
    """

    content: str


class CreateCommentAPIRequest(ContentAPIRequest):
    """API request for creating a comment."""

    parent_id: UUID | None = None  # Parent comment ID for replies


class VoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    value: int  # -1, 0 (retract) or +1


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: ContentAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication. The post is tagged with the author's line.

    Args:
        request: Post content
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie

    Returns:
        Created post

    Raises:
        HTTPException: 401, 400 on invalid content, 429 when rate limited
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(actor_id=actor_id, content=request.content)
        )
    except DomainError as e:
        logfire.warn("Post creation rejected", error=str(e))
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetThreadResponse)
async def get_thread(
    post_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetThreadResponse:
    """Get a post with its comments.

    Authentication is optional. When present, the response includes the
    actor's own vote on the post.
    """
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(
                post_id=str(post_id),
                actor_id=optional_actor_id(auth_token, jwt_service),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{post_id}", response_model=DeleteContentResponse)
async def delete_post(
    post_id: UUID,
    delete_content_use_case: FromDishka[DeleteContentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteContentResponse:
    """Soft-delete a post.

    Authors may delete their own posts; admins may delete any post.
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await delete_content_use_case.execute(
            DeleteContentRequest(
                actor_id=actor_id,
                votable_type=VotableType.POST,
                votable_id=str(post_id),
            )
        )
    except DomainError as e:
        logfire.warn("Post deletion rejected", post_id=str(post_id), error=str(e))
        raise to_http_exception(e)


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post or reply to a top-level comment.

    Args:
        post_id: Post UUID
        request: Comment content and optional parent comment
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie

    Raises:
        HTTPException: 400 for invalid content or reply depth, 404 for a
            missing post or parent, 409 for deleted content, 429 when rate limited
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                actor_id=actor_id,
                post_id=str(post_id),
                content=request.content,
                parent_id=str(request.parent_id) if request.parent_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation rejected", post_id=str(post_id), error=str(e))
        raise to_http_exception(e)


@router.put("/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Set, switch or retract the actor's vote on a post."""
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                actor_id=actor_id,
                votable_type=VotableType.POST,
                votable_id=str(post_id),
                value=request.value,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

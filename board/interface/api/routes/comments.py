"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from board.application.usecase.moderation import (
    DeleteContentRequest,
    DeleteContentResponse,
    DeleteContentUseCase,
)
from board.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.domain.value import VotableType
from board.interface.api.routes.posts import VoteAPIRequest
from board.interface.api.session import require_actor_id
from board.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


@router.delete("/{comment_id}", response_model=DeleteContentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_content_use_case: FromDishka[DeleteContentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteContentResponse:
    """Soft-delete a comment.

    Authors may delete their own comments; admins may delete any comment.
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await delete_content_use_case.execute(
            DeleteContentRequest(
                actor_id=actor_id,
                votable_type=VotableType.COMMENT,
                votable_id=str(comment_id),
            )
        )
    except DomainError as e:
        logfire.warn(
            "Comment deletion rejected", comment_id=str(comment_id), error=str(e)
        )
        raise to_http_exception(e)


@router.put("/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Set, switch or retract the actor's vote on a comment."""
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                actor_id=actor_id,
                votable_type=VotableType.COMMENT,
                votable_id=str(comment_id),
                value=request.value,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

"""Actor session routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from pydantic import BaseModel, Field

from board.application.usecase.actor import (
    BootstrapSessionRequest,
    BootstrapSessionUseCase,
    GetCurrentActorRequest,
    GetCurrentActorResponse,
    GetCurrentActorUseCase,
)
from board.config import Settings
from board.domain.error import DomainError, NotFoundError
from board.domain.service import JWTService
from board.domain.value import Line
from board.interface.api.session import require_actor_id
from board.interface.error import to_http_exception

router = APIRouter(prefix="/actors", tags=["actors"], route_class=DishkaRoute)


class BootstrapSessionAPIRequest(BaseModel):
    """API request for starting a session on a device."""

    device_id: str = Field(min_length=1, max_length=255)
    line: Line | None = None


class SessionAPIResponse(BaseModel):
    """Session details returned alongside the cookie."""

    actor_id: str
    line: Line
    is_admin: bool
    created: bool


@router.post("/session", response_model=SessionAPIResponse)
async def bootstrap_session(
    request: BootstrapSessionAPIRequest,
    response: Response,
    bootstrap_use_case: FromDishka[BootstrapSessionUseCase],
    settings: FromDishka[Settings],
) -> SessionAPIResponse:
    """Bind a device to an actor and set the session cookie.

    The first call from a device creates the actor. Later calls return the
    same actor with a fresh token.

    Args:
        request: Device and optional preferred line
        response: Response used to set the cookie
        bootstrap_use_case: Bootstrap session use case from DI
        settings: Application settings

    Returns:
        The actor bound to the device
    """
    try:
        result = await bootstrap_use_case.execute(
            BootstrapSessionRequest(device_id=request.device_id, line=request.line)
        )
    except DomainError as e:
        logfire.warn("Session bootstrap rejected", error=str(e))
        raise to_http_exception(e)

    is_production = settings.environment == "production"
    response.set_cookie(
        key="auth_token",
        value=result.token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )

    return SessionAPIResponse(
        actor_id=result.actor_id,
        line=result.line,
        is_admin=result.is_admin,
        created=result.created,
    )


@router.get("/me", response_model=GetCurrentActorResponse)
async def get_me(
    get_current_actor_use_case: FromDishka[GetCurrentActorUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentActorResponse:
    """Get the actor behind the session cookie.

    Raises:
        HTTPException: 401 if not authenticated or the actor no longer exists
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await get_current_actor_use_case.execute(
            GetCurrentActorRequest(actor_id=actor_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

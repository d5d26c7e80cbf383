"""Session cookie helpers shared by the routers."""

from fastapi import HTTPException, status

from board.domain.service import JWTService


def require_actor_id(auth_token: str | None, jwt_service: JWTService) -> str:
    """Resolve the acting actor from the session cookie.

    Args:
        auth_token: JWT token from cookie
        jwt_service: JWT domain service

    Returns:
        Actor ID carried by the token

    Raises:
        HTTPException: 401 if the cookie is missing or the token is invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    actor_id = jwt_service.get_actor_id_from_token(auth_token)
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    return actor_id


def optional_actor_id(auth_token: str | None, jwt_service: JWTService) -> str | None:
    """Resolve the actor if a valid session cookie is present."""
    return jwt_service.get_actor_id_from_token(auth_token)

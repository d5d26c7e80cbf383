"""Interface layer errors.

Maps domain errors onto HTTP responses.
"""

from fastapi import HTTPException, status

from board.domain.error import (
    AuthorizationError,
    ContentDeletedError,
    DomainError,
    FeedTimeoutError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP exception a route should raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the mapped status code and detail
    """
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, RateLimitError):
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(error),
            headers={"Retry-After": str(error.window_seconds)},
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, AuthorizationError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, ContentDeletedError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, FeedTimeoutError):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Feed query timed out"
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

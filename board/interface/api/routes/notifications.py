"""Notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status

from board.application.usecase.notification import (
    DeleteNotificationRequest,
    DeleteNotificationUseCase,
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.interface.api.session import require_actor_id
from board.interface.error import to_http_exception

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int | None = None,
    offset: int = 0,
    unread_only: bool = False,
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the actor's notifications, newest first.

    Args:
        list_notifications_use_case: List notifications use case from DI
        jwt_service: JWT service for token verification
        limit: Page size (1-100)
        offset: Number of notifications to skip
        unread_only: Only return unread notifications
        auth_token: JWT token from cookie
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await list_notifications_use_case.execute(
            ListNotificationsRequest(
                actor_id=actor_id, limit=limit, offset=offset, unread_only=unread_only
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/unread-count", response_model=GetUnreadCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUnreadCountResponse:
    """Count the actor's unread notifications."""
    actor_id = require_actor_id(auth_token, jwt_service)
    return await get_unread_count_use_case.execute(
        GetUnreadCountRequest(actor_id=actor_id)
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllReadResponse:
    """Mark every unread notification as read."""
    actor_id = require_actor_id(auth_token, jwt_service)
    return await mark_all_read_use_case.execute(MarkAllReadRequest(actor_id=actor_id))


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkReadResponse:
    """Mark one notification as read.

    Raises:
        HTTPException: 404 if missing, 403 if it belongs to another actor
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        return await mark_read_use_case.execute(
            MarkReadRequest(actor_id=actor_id, notification_id=str(notification_id))
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Dismiss a notification.

    Raises:
        HTTPException: 404 if missing, 403 if it belongs to another actor
    """
    actor_id = require_actor_id(auth_token, jwt_service)

    try:
        await delete_notification_use_case.execute(
            DeleteNotificationRequest(
                actor_id=actor_id, notification_id=str(notification_id)
            )
        )
    except DomainError as e:
        raise to_http_exception(e)

"""Notification use cases."""

from .delete_notification import DeleteNotificationRequest, DeleteNotificationUseCase
from .get_unread_count import (
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
)
from .list_notifications import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
)
from .mark_read import (
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
)

__all__ = [
    "DeleteNotificationRequest",
    "DeleteNotificationUseCase",
    "GetUnreadCountRequest",
    "GetUnreadCountResponse",
    "GetUnreadCountUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllReadRequest",
    "MarkAllReadResponse",
    "MarkAllReadUseCase",
    "MarkReadRequest",
    "MarkReadResponse",
    "MarkReadUseCase",
]

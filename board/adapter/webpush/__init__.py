"""Web Push adapter."""

from board.adapter.webpush.sender import (
    MockWebPushSender,
    RealWebPushSender,
    WebPushSender,
)

__all__ = ["WebPushSender", "RealWebPushSender", "MockWebPushSender"]

"""Feed use cases."""

from .get_feed import FeedItemView, GetFeedRequest, GetFeedResponse, GetFeedUseCase

__all__ = [
    "FeedItemView",
    "GetFeedRequest",
    "GetFeedResponse",
    "GetFeedUseCase",
]

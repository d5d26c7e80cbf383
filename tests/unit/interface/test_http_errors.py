"""Unit tests for mapping domain errors to HTTP responses."""

import pytest

from board.domain.error import (
    AuthorizationError,
    ContentDeletedError,
    FeedTimeoutError,
    InvalidCursorError,
    MaxDepthExceededError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from board.interface.error import to_http_exception


class TestToHttpException:
    """Tests for to_http_exception."""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (ValidationError("Content cannot be empty"), 400),
            (InvalidCursorError("garbage"), 400),
            (MaxDepthExceededError("abc"), 400),
            (NotFoundError("Post", "abc"), 404),
            (AuthorizationError("delete", "post", "abc", "def"), 403),
            (ContentDeletedError("Post", "abc"), 409),
            (FeedTimeoutError("slow"), 504),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert to_http_exception(error).status_code == status_code

    def test_rate_limit_sets_retry_after(self):
        """429 responses tell the client how long the window is."""
        exc = to_http_exception(RateLimitError("post", 10, 60))

        assert exc.status_code == 429
        assert exc.headers == {"Retry-After": "60"}

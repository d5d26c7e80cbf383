"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Rejected synchronously and never retried.
    """

    pass


class InvalidCursorError(ValidationError):
    """Raised when a feed cursor cannot be decoded."""

    def __init__(self, cursor: str):
        self.cursor = cursor
        super().__init__("Invalid cursor")


class MaxDepthExceededError(ValidationError):
    """Raised when replying to a comment that is already a reply."""

    def __init__(self, parent_id: str):
        self.parent_id = parent_id
        super().__init__(f"Max depth exceeded: comment {parent_id} cannot be replied to")


class RateLimitError(DomainError):
    """Raised when an actor exceeds the ceiling for an action kind."""

    def __init__(self, kind: str, limit: int, window_seconds: int):
        self.kind = kind
        self.limit = limit
        self.window_seconds = window_seconds
        super().__init__(
            f"Rate limit exceeded for {kind}: {limit} per {window_seconds} seconds"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthorizationError(DomainError):
    """Raised when an actor attempts an action on a resource they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str, actor_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.actor_id = actor_id
        super().__init__(
            f"Actor {actor_id} is not authorized to {action} {resource} {resource_id}"
        )


class ContentDeletedError(DomainError):
    """Raised when interacting with soft-deleted content."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} has been deleted")


class FeedTimeoutError(DomainError):
    """Raised when a feed query exceeds its time budget."""

    pass

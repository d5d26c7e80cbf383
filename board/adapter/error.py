"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class DeliveryError(AdapterError):
    """Push service rejected a message."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)

    @property
    def gone(self) -> bool:
        """Whether the push service reports the endpoint as permanently gone."""
        return self.status_code in (404, 410)

"""Domain errors."""


class FetchError(Exception):
    """Raised when a remote fetch fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

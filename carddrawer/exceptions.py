from typing import Optional


class DeckServiceError(Exception):
    """Base exception for errors talking to the remote deck service."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class DeckRequestError(DeckServiceError):
    """Raised when a request never produced a usable response
    (connection error, timeout, undecodable body)."""

    pass


class DeckResponseError(DeckServiceError):
    """Raised when the service answered with a non-success HTTP status or
    a body flagged ``success: false``."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message, original_exception=original_exception)
        self.status_code = status_code

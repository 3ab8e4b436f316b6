"""
Exceptions raised when talking to the directory backend.
"""
from typing import Optional


class DirectoryApiError(Exception):
    """Base exception for all backend call failures."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BackendConnectionError(DirectoryApiError):
    """Raised when the backend cannot be reached."""
    pass


class BackendTimeoutError(DirectoryApiError):
    """Raised when a request to the backend times out."""
    pass


class InvalidResponseError(DirectoryApiError):
    """Raised when a success response body does not have the expected shape."""
    pass

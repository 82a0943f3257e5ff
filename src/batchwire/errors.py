"""
Exceptions raised by batchwire.

Only total failures of a transport call surface as exceptions. Items a
service reports as failed inside a successful response are retried and,
once the retry budget is spent, dropped without raising.
"""

from typing import Optional


class BatchwireError(Exception):
    """Base class for batchwire errors."""
    pass


class TransportError(BatchwireError):
    """Raised when a call to the stream or queue service itself fails."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class TransportNotConnectedError(BatchwireError):
    """Raised when a transport is used before connect()."""
    pass

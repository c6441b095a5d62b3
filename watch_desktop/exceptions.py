"""Errors raised by the watch client and surfaced by the dashboard."""

from typing import Iterable, List, Optional


class WatchError(Exception):
    """Base class for watch client errors."""


class FetchError(WatchError):
    """Raised when the service is unreachable or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(WatchError):
    """Raised when an add request is rejected, locally or by the service."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = [str(e) for e in errors]
        super().__init__("; ".join(self.errors))

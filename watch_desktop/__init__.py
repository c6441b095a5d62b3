"""Balance watch desktop client.

The core (dashboard, store, selection, resolver, mutations) has no Qt
dependency; ``main_window``, ``widgets`` and ``workers`` bind it to PySide6.
"""

from .dashboard import Dashboard
from .exceptions import FetchError, ValidationError, WatchError
from .models import BalanceSnapshot, IdentifierKind, WatchedIdentifier

__all__ = [
    "Dashboard",
    "FetchError",
    "ValidationError",
    "WatchError",
    "BalanceSnapshot",
    "IdentifierKind",
    "WatchedIdentifier",
]

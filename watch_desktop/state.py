"""Explicit dashboard state and the listener interface the UI implements.

The components in this package are the only writers of ``DashboardState``.
The window reads it and is told about changes through ``DashboardListener``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .models import BalanceSnapshot, WatchedIdentifier


class DetailState(Enum):
    """State of the detail panel."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    DISPLAYED = "DISPLAYED"
    ERROR = "ERROR"


@dataclass
class Selection:
    """The single selected identifier, tagged with a generation counter.

    ``generation`` changes on every selection change, so a response can be
    matched against the selection that was live when its request was issued.
    """

    current: Optional[str] = None
    generation: int = 0

    def set(self, identifier: str) -> int:
        self.current = identifier
        self.generation += 1
        return self.generation

    def clear(self) -> int:
        self.current = None
        self.generation += 1
        return self.generation

    def matches(self, identifier: str, generation: int) -> bool:
        """True when a request tagged (identifier, generation) is still current."""
        return self.current == identifier and self.generation == generation


@dataclass
class DetailView:
    """What the detail panel shows."""

    state: DetailState = DetailState.IDLE
    identifier: Optional[str] = None
    snapshot: Optional[BalanceSnapshot] = None
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "DetailView":
        return cls()

    @classmethod
    def loading(cls, identifier: str) -> "DetailView":
        return cls(state=DetailState.LOADING, identifier=identifier)

    @classmethod
    def displayed(cls, identifier: str, snapshot: BalanceSnapshot) -> "DetailView":
        return cls(state=DetailState.DISPLAYED, identifier=identifier, snapshot=snapshot)

    @classmethod
    def failed(cls, identifier: str, error: str) -> "DetailView":
        return cls(state=DetailState.ERROR, identifier=identifier, error=error)


@dataclass
class StatusMessage:
    """Transient status text shown after an add or remove."""

    text: str
    success: bool
    faded: bool = False

    @classmethod
    def ok(cls, text: str = "Success") -> "StatusMessage":
        return cls(text=text, success=True)

    @classmethod
    def failure(cls, text: str = "Failure") -> "StatusMessage":
        return cls(text=text, success=False)


@dataclass
class DashboardState:
    """Everything the dashboard shows, in one place."""

    watchlist: List[WatchedIdentifier] = field(default_factory=list)
    selection: Selection = field(default_factory=Selection)
    detail: DetailView = field(default_factory=DetailView)
    add_status: Optional[StatusMessage] = None
    remove_status: Optional[StatusMessage] = None
    last_refreshed: Optional[datetime] = None
    notice: Optional[str] = None

    def find(self, identifier: str) -> Optional[WatchedIdentifier]:
        """Look up a watched identifier by its key."""
        for entry in self.watchlist:
            if entry.identifier == identifier:
                return entry
        return None

    @property
    def selected_entry(self) -> Optional[WatchedIdentifier]:
        if self.selection.current is None:
            return None
        return self.find(self.selection.current)


class DashboardListener:
    """Receives state change notifications. All methods default to no-ops."""

    def watchlist_changed(self, watchlist: List[WatchedIdentifier]) -> None:
        pass

    def selection_changed(self, identifier: Optional[str]) -> None:
        pass

    def detail_changed(self, detail: DetailView) -> None:
        pass

    def add_status_changed(self, status: StatusMessage) -> None:
        pass

    def remove_status_changed(self, status: StatusMessage) -> None:
        pass

    def notice_raised(self, message: str) -> None:
        pass

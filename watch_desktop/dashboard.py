"""Dashboard: owns the state and wires the components together.

The window talks only to this class. Nothing here imports Qt; the window
supplies a runner and a scheduler that do.
"""

import logging
from typing import List, Optional

from .client import WatchClient
from .exceptions import ValidationError
from .models import WatchedIdentifier
from .mutations import DEFAULT_FADE_DELAY_MS, MutationController, RemoveRefreshPolicy, Scheduler
from .resolver import DetailResolver
from .runner import RequestRunner
from .selection import SelectionController
from .state import DashboardListener, DashboardState
from .store import WatchlistStore

logger = logging.getLogger(__name__)


class Dashboard:
    """Watchlist, selection, detail and mutations behind one facade."""

    def __init__(
        self,
        client: WatchClient,
        runner: RequestRunner,
        scheduler: Scheduler,
        listener: Optional[DashboardListener] = None,
        fade_delay_ms: int = DEFAULT_FADE_DELAY_MS,
        remove_refresh_policy: RemoveRefreshPolicy = RemoveRefreshPolicy.ALWAYS,
        validate_input: bool = True,
    ):
        self.state = DashboardState()
        self.listener = listener or DashboardListener()

        self.store = WatchlistStore(
            client, runner, self.state, self.listener,
            on_applied=self._on_watchlist_applied,
        )
        self.resolver = DetailResolver(client, runner, self.state, self.listener)
        self.selection = SelectionController(self.state, self.resolver, self.listener)
        self.mutations = MutationController(
            client,
            runner,
            scheduler,
            self.state,
            self.store,
            self.selection,
            self.listener,
            fade_delay_ms=fade_delay_ms,
            remove_refresh_policy=remove_refresh_policy,
            validate_input=validate_input,
        )

    def start(self) -> None:
        """Load the watchlist for the first time."""
        self.store.refresh()

    def refresh(self) -> None:
        self.store.refresh()

    def click_entry(self, identifier: str) -> None:
        """User clicked a list entry."""
        self.selection.select(identifier)

    def click_container(self) -> None:
        """User clicked the list outside any entry."""
        self.selection.toggle_off()

    def retry_detail(self) -> None:
        self.selection.reload()

    def add(self, identifier: str, nickname: str) -> Optional[ValidationError]:
        return self.mutations.add(identifier, nickname)

    def remove(self, identifier: str) -> None:
        self.mutations.remove(identifier)

    def remove_selected(self) -> bool:
        return self.mutations.remove_selected()

    def _on_watchlist_applied(self, watchlist: List[WatchedIdentifier]):
        # The selected entry disappeared server-side
        current = self.state.selection.current
        if current is not None and self.state.find(current) is None:
            logger.info(f"[Dashboard] Selected identifier {current} no longer watched")
            self.selection.toggle_off()

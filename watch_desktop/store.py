"""Watchlist store: the in-memory list of watched identifiers."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .client import WatchClient
from .models import WatchedIdentifier
from .runner import RequestOutcome, RequestRunner
from .state import DashboardListener, DashboardState

logger = logging.getLogger(__name__)


class WatchlistStore:
    """Fetches the watchlist and replaces the in-memory copy wholesale.

    Each refresh gets an increasing token. A response is dropped if a newer
    refresh has already been applied, so overlapping refreshes never roll
    the list back to an older server state.
    """

    def __init__(
        self,
        client: WatchClient,
        runner: RequestRunner,
        state: DashboardState,
        listener: DashboardListener,
        on_applied: Optional[Callable[[List[WatchedIdentifier]], None]] = None,
    ):
        self.client = client
        self.runner = runner
        self.state = state
        self.listener = listener
        self.on_applied = on_applied
        self._issued = 0
        self._applied = 0

    @property
    def watchlist(self) -> List[WatchedIdentifier]:
        return self.state.watchlist

    def refresh(self) -> int:
        """Request the current watchlist from the service.

        Returns:
            Token of the issued refresh
        """
        self._issued += 1
        token = self._issued
        logger.debug(f"[WatchlistStore] Refresh #{token} issued")
        self.runner.submit(
            self.client.fetch_watchlist,
            lambda outcome: self._on_refreshed(token, outcome),
        )
        return token

    def _on_refreshed(self, token: int, outcome: RequestOutcome):
        if token < self._applied:
            logger.debug(f"[WatchlistStore] Discarding refresh #{token}, #{self._applied} already applied")
            return

        if not outcome.success:
            # Keep the last-known list
            logger.warning(f"[WatchlistStore] Refresh #{token} failed: {outcome.error}")
            self.state.notice = f"Could not refresh watchlist: {outcome.error}"
            self.listener.notice_raised(self.state.notice)
            return

        self._applied = token
        self.state.watchlist = list(outcome.value)
        self.state.last_refreshed = datetime.now()
        self.state.notice = None
        logger.info(f"[WatchlistStore] Watchlist refreshed: {len(self.state.watchlist)} entries")
        self.listener.watchlist_changed(self.state.watchlist)
        if self.on_applied is not None:
            self.on_applied(self.state.watchlist)

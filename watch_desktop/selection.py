"""Selection controller: which identifier the detail panel is about."""

import logging
from typing import Optional

from .resolver import DetailResolver
from .state import DashboardListener, DashboardState, DetailState, DetailView

logger = logging.getLogger(__name__)


class SelectionController:
    """Tracks the single selection with toggle-to-deselect semantics."""

    def __init__(
        self,
        state: DashboardState,
        resolver: DetailResolver,
        listener: DashboardListener,
    ):
        self.state = state
        self.resolver = resolver
        self.listener = listener

    @property
    def current(self) -> Optional[str]:
        return self.state.selection.current

    def select(self, identifier: str) -> None:
        """Select an entry, or deselect it if it is already selected."""
        if identifier == self.state.selection.current:
            self.toggle_off()
            return
        if self.state.find(identifier) is None:
            logger.warning(f"[Selection] Ignoring selection of unwatched identifier {identifier}")
            return

        self.state.selection.set(identifier)
        self.listener.selection_changed(identifier)
        self.resolver.resolve(identifier)

    def toggle_off(self) -> None:
        """Clear the selection and the detail panel. No network call."""
        self.state.selection.clear()
        self.listener.selection_changed(None)
        if self.state.detail.state != DetailState.IDLE:
            self.state.detail = DetailView.idle()
            self.listener.detail_changed(self.state.detail)

    def reload(self) -> None:
        """Fetch the current selection again under a new generation."""
        identifier = self.state.selection.current
        if identifier is None:
            return
        self.state.selection.set(identifier)
        self.resolver.resolve(identifier)

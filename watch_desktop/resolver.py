"""Detail resolver: turns the selected identifier into a balance snapshot."""

import logging
from functools import partial

from .client import WatchClient
from .runner import RequestOutcome, RequestRunner
from .state import DashboardListener, DashboardState, DetailView

logger = logging.getLogger(__name__)


class DetailResolver:
    """Fetches balance snapshots for the live selection.

    Every request is tagged with the selection identifier and generation
    active when it was issued. A response is applied only if both still
    match; otherwise it is dropped and the panel keeps its current state.
    """

    def __init__(
        self,
        client: WatchClient,
        runner: RequestRunner,
        state: DashboardState,
        listener: DashboardListener,
    ):
        self.client = client
        self.runner = runner
        self.state = state
        self.listener = listener

    def resolve(self, identifier: str) -> None:
        """Fetch the snapshot for ``identifier``, which must be selected."""
        generation = self.state.selection.generation
        self.state.detail = DetailView.loading(identifier)
        self.listener.detail_changed(self.state.detail)

        self.runner.submit(
            partial(self.client.fetch_balance, identifier),
            lambda outcome: self._on_resolved(identifier, generation, outcome),
        )

    def _on_resolved(self, identifier: str, generation: int, outcome: RequestOutcome):
        if not self.state.selection.matches(identifier, generation):
            logger.debug(
                f"[DetailResolver] Discarding stale balance for {identifier} "
                f"(generation {generation}, now {self.state.selection.generation})"
            )
            return

        if outcome.success:
            self.state.detail = DetailView.displayed(identifier, outcome.value)
        else:
            logger.warning(f"[DetailResolver] Balance fetch failed for {identifier}: {outcome.error}")
            self.state.detail = DetailView.failed(identifier, str(outcome.error))
        self.listener.detail_changed(self.state.detail)

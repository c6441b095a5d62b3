"""Mutation controller: add and remove watched identifiers."""

import logging
from enum import Enum
from functools import partial
from typing import Callable, List, Optional

from .client import WatchClient
from .exceptions import ValidationError
from .runner import RequestOutcome, RequestRunner
from .selection import SelectionController
from .state import DashboardListener, DashboardState, StatusMessage
from .store import WatchlistStore

logger = logging.getLogger(__name__)

# scheduler(delay_ms, callback)
Scheduler = Callable[[int, Callable[[], None]], None]

DEFAULT_FADE_DELAY_MS = 2000


class RemoveRefreshPolicy(Enum):
    """When a finished remove refreshes the watchlist."""

    ALWAYS = "always"
    ON_SUCCESS = "on_success"

    @classmethod
    def parse(cls, value: str) -> "RemoveRefreshPolicy":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid remove refresh policy {value!r} (expected one of: {choices})")


def validate_watch_request(identifier: str, nickname: str) -> List[str]:
    """Check an add request before it is sent.

    Returns:
        List of error messages (empty if the request is valid)
    """
    errors = []
    if not identifier:
        errors.append("Identifier is required")
    if not nickname:
        errors.append("Nickname is required")
    return errors


class MutationController:
    """Adds and removes watched identifiers and reports the outcome.

    No retry, debounce or cancellation: a second mutation issued while one
    is outstanding simply races it.
    """

    def __init__(
        self,
        client: WatchClient,
        runner: RequestRunner,
        scheduler: Scheduler,
        state: DashboardState,
        store: WatchlistStore,
        selection: SelectionController,
        listener: DashboardListener,
        fade_delay_ms: int = DEFAULT_FADE_DELAY_MS,
        remove_refresh_policy: RemoveRefreshPolicy = RemoveRefreshPolicy.ALWAYS,
        validate_input: bool = True,
    ):
        self.client = client
        self.runner = runner
        self.scheduler = scheduler
        self.state = state
        self.store = store
        self.selection = selection
        self.listener = listener
        self.fade_delay_ms = fade_delay_ms
        self.remove_refresh_policy = remove_refresh_policy
        self.validate_input = validate_input

    # ------------------------------------------------------------------
    # Add
    # ------------------------------------------------------------------

    def add(self, identifier: str, nickname: str) -> Optional[ValidationError]:
        """Submit a new identifier to watch.

        Args:
            identifier: Address or pubkey
            nickname: Display name for the list

        Returns:
            ValidationError if the input was rejected locally (nothing was
            sent), None if the request was issued
        """
        identifier = identifier.strip()
        nickname = nickname.strip()

        if self.validate_input:
            errors = validate_watch_request(identifier, nickname)
            if errors:
                error = ValidationError(errors)
                logger.info(f"[Mutation] Add rejected locally: {error}")
                self._set_add_status(StatusMessage.failure(str(error)))
                return error

        logger.info(f"[Mutation] Adding {identifier} ({nickname})")
        self.runner.submit(
            partial(self.client.add_watch, identifier, nickname),
            lambda outcome: self._on_added(identifier, outcome),
        )
        return None

    def _on_added(self, identifier: str, outcome: RequestOutcome):
        if outcome.success:
            logger.info(f"[Mutation] Now watching {identifier}")
            status = StatusMessage.ok()
            self._set_add_status(status)
            self.store.refresh()
        else:
            logger.warning(f"[Mutation] Add of {identifier} failed: {outcome.error}")
            status = StatusMessage.failure(str(outcome.error))
            self._set_add_status(status)
        self._schedule_fade("add_status", status)

    def _set_add_status(self, status: StatusMessage):
        self.state.add_status = status
        self.listener.add_status_changed(status)

    # ------------------------------------------------------------------
    # Remove
    # ------------------------------------------------------------------

    def remove(self, identifier: str) -> None:
        """Stop watching ``identifier``."""
        logger.info(f"[Mutation] Removing {identifier}")
        self.runner.submit(
            partial(self.client.remove_identifier, identifier),
            lambda outcome: self._on_removed(identifier, outcome),
        )

    def remove_selected(self) -> bool:
        """Remove the currently selected identifier, if any.

        Returns:
            True if a remove was issued
        """
        identifier = self.state.selection.current
        if identifier is None:
            return False
        self.remove(identifier)
        return True

    def _on_removed(self, identifier: str, outcome: RequestOutcome):
        if not outcome.success:
            logger.warning(f"[Mutation] Remove of {identifier} failed: {outcome.error}")
            status = StatusMessage.failure(f"Failure: {outcome.error}")
            self._set_remove_status(status)
            self._schedule_fade("remove_status", status)
            return

        removed = bool(outcome.value)
        if removed:
            logger.info(f"[Mutation] Stopped watching {identifier}")
            status = StatusMessage.ok()
        else:
            logger.warning(f"[Mutation] Service refused to remove {identifier}")
            status = StatusMessage.failure()
        self._set_remove_status(status)

        self.selection.toggle_off()
        if removed or self.remove_refresh_policy == RemoveRefreshPolicy.ALWAYS:
            self.store.refresh()
        self._schedule_fade("remove_status", status)

    def _set_remove_status(self, status: StatusMessage):
        self.state.remove_status = status
        self.listener.remove_status_changed(status)

    # ------------------------------------------------------------------
    # Status fading
    # ------------------------------------------------------------------

    def _schedule_fade(self, slot: str, status: StatusMessage):
        self.scheduler(self.fade_delay_ms, lambda: self._fade(slot, status))

    def _fade(self, slot: str, status: StatusMessage):
        # A newer status replaced this one; its own fade is pending
        if getattr(self.state, slot) is not status:
            return
        status.faded = True
        if slot == "add_status":
            self.listener.add_status_changed(status)
        else:
            self.listener.remove_status_changed(status)

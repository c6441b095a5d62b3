"""Request runners: where blocking client calls execute.

A runner takes a zero-argument callable and a callback. The callable runs
somewhere (a worker thread in the app, inline in tests) and the callback
receives a ``RequestOutcome`` on the event thread.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .exceptions import WatchError


@dataclass
class RequestOutcome:
    """Result of a runner-executed request."""

    value: Any = None
    error: Optional[WatchError] = None

    @property
    def success(self) -> bool:
        return self.error is None


def run_request(func: Callable[[], Any]) -> RequestOutcome:
    """Call ``func`` and capture its value or its WatchError."""
    try:
        return RequestOutcome(value=func())
    except WatchError as e:
        return RequestOutcome(error=e)


class RequestRunner:
    """Interface for running requests off the event thread."""

    def submit(
        self,
        func: Callable[[], Any],
        callback: Callable[[RequestOutcome], None],
    ) -> None:
        raise NotImplementedError


class ImmediateRunner(RequestRunner):
    """Runs each request inline and calls back before returning."""

    def submit(self, func, callback):
        callback(run_request(func))

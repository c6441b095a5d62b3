"""Shared fakes for dashboard tests."""

from decimal import Decimal

import pytest

from watch_desktop.dashboard import Dashboard
from watch_desktop.exceptions import FetchError, ValidationError
from watch_desktop.models import BalanceSnapshot, IdentifierKind, WatchedIdentifier
from watch_desktop.runner import RequestRunner, run_request
from watch_desktop.state import DashboardListener


def make_entry(identifier: str, nickname: str) -> WatchedIdentifier:
    return WatchedIdentifier(identifier, nickname, IdentifierKind.detect(identifier))


def make_snapshot(identifier: str, balance_sat: int = 500, previous_sat: int = 400) -> BalanceSnapshot:
    return BalanceSnapshot(
        identifier=identifier,
        kind=IdentifierKind.detect(identifier),
        balance_sat=balance_sat,
        previous_balance_sat=previous_sat,
        balance_currency=Decimal("0.15"),
        previous_balance_currency=Decimal("0.12"),
        currency_code="USD",
        tx_count=3,
    )


class FakeClient:
    """In-memory stand-in for WatchClient.

    Responses are looked up when a request completes, not when it is
    issued, so tests can change them between the two.
    """

    def __init__(self):
        self.watchlist = []
        self.balances = {}
        self.add_error = None
        self.remove_result = True
        self.remove_error = None
        self.watchlist_error = None
        self.calls = []

    def fetch_watchlist(self):
        self.calls.append(("fetch_watchlist",))
        if self.watchlist_error is not None:
            raise self.watchlist_error
        return list(self.watchlist)

    def fetch_balance(self, identifier):
        self.calls.append(("fetch_balance", identifier))
        result = self.balances.get(identifier)
        if result is None:
            raise FetchError(f"No balance information for {identifier}", status_code=204)
        if isinstance(result, Exception):
            raise result
        return result

    def add_watch(self, identifier, nickname):
        self.calls.append(("add_watch", identifier, nickname))
        if self.add_error is not None:
            raise self.add_error
        if any(e.identifier == identifier for e in self.watchlist):
            raise ValidationError(["Address is already being watched"])
        self.watchlist.append(make_entry(identifier, nickname))

    def remove_identifier(self, identifier):
        self.calls.append(("remove_identifier", identifier))
        if self.remove_error is not None:
            raise self.remove_error
        if self.remove_result:
            self.watchlist = [e for e in self.watchlist if e.identifier != identifier]
        return self.remove_result

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


class ManualRunner(RequestRunner):
    """Holds requests until the test completes them, in any order."""

    def __init__(self):
        self.pending = []

    def submit(self, func, callback):
        self.pending.append((func, callback))

    def complete(self, index: int = 0):
        func, callback = self.pending.pop(index)
        callback(run_request(func))

    def complete_all(self):
        while self.pending:
            self.complete(0)


class ManualScheduler:
    """Records scheduled callbacks; ``fire_all`` runs them."""

    def __init__(self):
        self.scheduled = []

    def __call__(self, delay_ms, callback):
        self.scheduled.append((delay_ms, callback))

    def fire_all(self):
        scheduled, self.scheduled = self.scheduled, []
        for _, callback in scheduled:
            callback()


class RecordingListener(DashboardListener):
    """Remembers every notification it receives."""

    def __init__(self):
        self.events = []

    def watchlist_changed(self, watchlist):
        self.events.append(("watchlist", [e.identifier for e in watchlist]))

    def selection_changed(self, identifier):
        self.events.append(("selection", identifier))

    def detail_changed(self, detail):
        self.events.append(("detail", detail.state, detail.identifier))

    def add_status_changed(self, status):
        self.events.append(("add_status", status.text, status.faded))

    def remove_status_changed(self, status):
        self.events.append(("remove_status", status.text, status.faded))

    def notice_raised(self, message):
        self.events.append(("notice", message))

    def of(self, kind):
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def client():
    fake = FakeClient()
    fake.watchlist = [
        make_entry("1Abc", "wallet1"),
        make_entry("xpub6Def", "cold storage"),
    ]
    fake.balances = {
        "1Abc": make_snapshot("1Abc"),
        "xpub6Def": make_snapshot("xpub6Def", 12000, 12000),
    }
    return fake


@pytest.fixture
def runner():
    return ManualRunner()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def dashboard(client, runner, scheduler, listener):
    """A dashboard with its initial watchlist already loaded."""
    board = Dashboard(client, runner, scheduler, listener=listener)
    board.start()
    runner.complete_all()
    return board

"""End-to-end dashboard scenarios with a fake service."""

from watch_desktop.dashboard import Dashboard
from watch_desktop.runner import ImmediateRunner
from watch_desktop.state import DetailState

from conftest import FakeClient, ManualScheduler, RecordingListener, make_entry, make_snapshot


class TestScenarios:
    """Scenarios from the service contract."""

    def test_single_address_to_balance(self, runner, scheduler, listener):
        """Test list shows 'wallet1 (address)' and selecting shows its balance."""
        client = FakeClient()
        client.watchlist = [make_entry("1Abc", "wallet1")]
        client.balances = {"1Abc": make_snapshot("1Abc", 500, 400)}
        board = Dashboard(client, runner, scheduler, listener=listener)

        board.start()
        runner.complete_all()
        assert [e.display_name for e in board.state.watchlist] == ["wallet1 (address)"]

        board.click_entry("1Abc")
        runner.complete_all()

        assert client.calls[-1] == ("fetch_balance", "1Abc")
        snapshot = board.state.detail.snapshot
        assert board.state.detail.state == DetailState.DISPLAYED
        assert "Balance: 500 satoshis" in snapshot.summary_lines()
        assert "Previous Balance: 400 satoshis" in snapshot.summary_lines()

    def test_immediate_runner(self):
        """Test the synchronous runner drives the same flow."""
        client = FakeClient()
        client.watchlist = [make_entry("1Abc", "wallet1")]
        client.balances = {"1Abc": make_snapshot("1Abc")}
        board = Dashboard(client, ImmediateRunner(), ManualScheduler(), listener=RecordingListener())

        board.start()
        board.click_entry("1Abc")

        assert board.state.detail.state == DetailState.DISPLAYED


class TestConsistency:
    """Tests for list/selection consistency across mutations."""

    def test_uniqueness_after_mutations(self, dashboard, client, runner):
        """Test no duplicate identifiers after racing adds and removes settle."""
        dashboard.add("1Xyz", "wallet2")
        dashboard.add("1Xyz", "wallet2 again")
        dashboard.remove("1Abc")
        dashboard.add("xpub6New", "hot")
        runner.complete_all()

        identifiers = [e.identifier for e in dashboard.state.watchlist]
        assert len(identifiers) == len(set(identifiers))
        assert "1Abc" not in identifiers
        assert "xpub6New" in identifiers

    def test_selection_cleared_when_entry_disappears(self, dashboard, client, runner):
        """Test a refresh that drops the selected entry clears the selection."""
        dashboard.click_entry("1Abc")
        runner.complete_all()

        client.watchlist = [make_entry("xpub6Def", "cold storage")]
        dashboard.refresh()
        runner.complete_all()

        assert dashboard.state.selection.current is None
        assert dashboard.state.detail.state == DetailState.IDLE

    def test_selection_kept_when_entry_remains(self, dashboard, runner):
        """Test a refresh keeps a still-listed selection and its detail."""
        dashboard.click_entry("xpub6Def")
        runner.complete_all()

        dashboard.refresh()
        runner.complete_all()

        assert dashboard.state.selection.current == "xpub6Def"
        assert dashboard.state.detail.state == DetailState.DISPLAYED

    def test_selected_entry(self, dashboard, runner):
        """Test selected_entry resolves the selection to its watchlist entry."""
        assert dashboard.state.selected_entry is None

        dashboard.click_entry("xpub6Def")

        assert dashboard.state.selected_entry.nickname == "cold storage"

"""Tests for response parsing models."""

from decimal import Decimal

import pytest

from watch_desktop.models import (
    BalanceSnapshot,
    IdentifierKind,
    WatchedIdentifier,
    parse_watchlist,
)


class TestIdentifierKind:
    """Tests for identifier kind detection."""

    @pytest.mark.parametrize("identifier", ["xpub6CUGRU", "ypub6QqdH2", "zpub6rFR7y"])
    def test_extended_keys_are_pubkeys(self, identifier):
        """Test xpub/ypub/zpub prefixes are detected as pubkeys."""
        assert IdentifierKind.detect(identifier) == IdentifierKind.PUBKEY

    def test_everything_else_is_an_address(self):
        """Test plain addresses, including bech32, are addresses."""
        assert IdentifierKind.detect("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa") == IdentifierKind.ADDRESS
        assert IdentifierKind.detect("bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq") == IdentifierKind.ADDRESS


class TestParseWatchlist:
    """Tests for parse_watchlist."""

    def test_scenario_single_address(self):
        """Test one address renders as 'wallet1 (address)'."""
        watchlist = parse_watchlist({
            "addresses": [{"Address": "1Abc", "Nickname": "wallet1"}],
            "pubkeys": [],
        })

        assert len(watchlist) == 1
        assert watchlist[0].identifier == "1Abc"
        assert watchlist[0].display_name == "wallet1 (address)"

    def test_addresses_before_pubkeys(self):
        """Test addresses come first, then pubkeys, in service order."""
        watchlist = parse_watchlist({
            "addresses": [
                {"Address": "1B", "Nickname": "b"},
                {"Address": "1A", "Nickname": "a"},
            ],
            "pubkeys": [{"Pubkey": "xpubX", "Nickname": "x"}],
        })

        assert [e.identifier for e in watchlist] == ["1B", "1A", "xpubX"]
        assert watchlist[2].kind == IdentifierKind.PUBKEY
        assert watchlist[2].display_name == "x (pubkey)"

    def test_missing_and_null_lists(self):
        """Test omitted or null lists give an empty watchlist."""
        assert parse_watchlist({}) == []
        assert parse_watchlist({"addresses": None, "pubkeys": None}) == []

    def test_duplicates_keep_first(self):
        """Test a duplicated identifier appears once."""
        watchlist = parse_watchlist({
            "addresses": [
                {"Address": "1A", "Nickname": "first"},
                {"Address": "1A", "Nickname": "second"},
            ],
        })

        assert watchlist == [WatchedIdentifier("1A", "first", IdentifierKind.ADDRESS)]

    def test_entry_without_identifier_raises(self):
        """Test an entry missing its key is a format error."""
        with pytest.raises(KeyError):
            parse_watchlist({"addresses": [{"Nickname": "nope"}]})


class TestBalanceSnapshot:
    """Tests for BalanceSnapshot.from_dict."""

    def test_address_snapshot(self):
        """Test parsing an address reqInfo with string currency values."""
        snapshot = BalanceSnapshot.from_dict({
            "Address": "1Abc",
            "Nickname": "wallet1",
            "BalanceSat": 500,
            "PreviousBalanceSat": 400,
            "BalanceCurrency": "0.30",
            "PreviousBalanceCurrency": "0.24",
            "Currency": "USD",
            "TXCount": 2,
        })

        assert snapshot.identifier == "1Abc"
        assert snapshot.kind == IdentifierKind.ADDRESS
        assert snapshot.balance_currency == Decimal("0.30")
        assert snapshot.balance_change_sat == 100
        assert "Balance: 500 satoshis" in snapshot.summary_lines()
        assert snapshot.value_text == "0.30 USD"

    def test_pubkey_snapshot_numeric_currency(self):
        """Test parsing a pubkey reqInfo with numeric fiat values."""
        snapshot = BalanceSnapshot.from_dict({
            "Pubkey": "xpubAbc",
            "BalanceSat": 0,
            "PreviousBalanceSat": 1000,
            "BalanceFiat": 0,
            "PreviousBalanceFiat": 12.5,
            "Currency": "EUR",
            "TXCount": 7,
        })

        assert snapshot.kind == IdentifierKind.PUBKEY
        assert snapshot.previous_balance_currency == Decimal("12.5")
        assert snapshot.balance_change_sat == -1000
        assert snapshot.summary_lines()[0] == "Pubkey: xpubAbc"

    def test_pubkey_snapshot_reads_fiat_fields(self):
        """Test a pubkey's value comes from BalanceFiat, not a zero default."""
        snapshot = BalanceSnapshot.from_dict({
            "Pubkey": "xpub6Def",
            "Nickname": "cold storage",
            "BalanceSat": 12000,
            "PreviousBalanceSat": 11000,
            "BalanceFiat": "4.20",
            "PreviousBalanceFiat": "3.90",
            "Currency": "USD",
            "TXCount": 7,
        })

        assert snapshot.balance_currency == Decimal("4.20")
        assert snapshot.previous_balance_currency == Decimal("3.90")
        assert snapshot.value_text == "4.20 USD"
        assert "Previous Value: 3.90 USD" in snapshot.summary_lines()

    def test_pubkey_snapshot_accepts_currency_field_names(self):
        """Test a pubkey reqInfo using the address field names still parses."""
        snapshot = BalanceSnapshot.from_dict({
            "Pubkey": "xpubAbc",
            "BalanceSat": 1,
            "PreviousBalanceSat": 1,
            "BalanceCurrency": "1.50",
            "PreviousBalanceCurrency": "1.25",
            "Currency": "EUR",
        })

        assert snapshot.balance_currency == Decimal("1.50")
        assert snapshot.previous_balance_currency == Decimal("1.25")

    def test_missing_amount_raises(self):
        """Test an absent amount field is a format error, not zero."""
        with pytest.raises(KeyError):
            BalanceSnapshot.from_dict({
                "Pubkey": "xpubAbc",
                "BalanceSat": 1,
                "PreviousBalanceSat": 1,
                "Currency": "USD",
            })

    def test_blank_currency_is_zero(self):
        """Test empty currency strings from a fresh entry parse as zero."""
        snapshot = BalanceSnapshot.from_dict({
            "Address": "1New",
            "BalanceSat": 0,
            "PreviousBalanceSat": 0,
            "BalanceCurrency": "",
            "PreviousBalanceCurrency": "",
            "Currency": "",
            "TXCount": 0,
        })

        assert snapshot.balance_currency == Decimal("0")
        assert snapshot.value_text == "0"

    def test_bad_currency_raises_value_error(self):
        """Test a non-numeric amount is rejected."""
        with pytest.raises(ValueError):
            BalanceSnapshot.from_dict({
                "Address": "1Abc",
                "BalanceSat": 1,
                "PreviousBalanceSat": 1,
                "BalanceCurrency": "lots",
            })

    def test_no_identifier_raises(self):
        """Test a blank reqInfo is rejected."""
        with pytest.raises(KeyError):
            BalanceSnapshot.from_dict({"Address": "", "BalanceSat": 0, "PreviousBalanceSat": 0})

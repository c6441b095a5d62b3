"""Dataclasses for parsing API responses.

These mirror the balance service's JSON payloads. Field names on the wire
are capitalized (``Address``, ``BalanceSat``...) while the dataclasses use
snake_case.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)

# Extended public key prefixes the service treats as pubkeys
PUBKEY_PREFIXES = ("xpub", "ypub", "zpub")


class IdentifierKind(Enum):
    """Kind of a watched identifier."""

    ADDRESS = "address"
    PUBKEY = "pubkey"

    @classmethod
    def detect(cls, identifier: str) -> "IdentifierKind":
        """Guess the kind from the identifier text, as the service does."""
        if identifier.startswith(PUBKEY_PREFIXES):
            return cls.PUBKEY
        return cls.ADDRESS

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        return {
            IdentifierKind.ADDRESS: "Address",
            IdentifierKind.PUBKEY: "Pubkey",
        }[self]


def _to_decimal(value) -> Decimal:
    """Parse a currency amount sent as a string or a number."""
    if value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid currency amount: {value!r}")


def _amount(data: dict, *keys: str) -> Decimal:
    """Read the first amount field present; a blank value means zero."""
    for key in keys:
        if key in data:
            return _to_decimal(data[key])
    raise KeyError(keys[0])


@dataclass(frozen=True)
class WatchedIdentifier:
    """A single watched address or pubkey."""

    identifier: str
    nickname: str
    kind: IdentifierKind

    @classmethod
    def from_address_dict(cls, data: dict) -> "WatchedIdentifier":
        """Create instance from an entry of the ``addresses`` list."""
        return cls(
            identifier=data["Address"],
            nickname=data.get("Nickname") or "",
            kind=IdentifierKind.ADDRESS,
        )

    @classmethod
    def from_pubkey_dict(cls, data: dict) -> "WatchedIdentifier":
        """Create instance from an entry of the ``pubkeys`` list."""
        return cls(
            identifier=data["Pubkey"],
            nickname=data.get("Nickname") or "",
            kind=IdentifierKind.PUBKEY,
        )

    @property
    def display_name(self) -> str:
        """List entry text, e.g. ``wallet1 (address)``."""
        return f"{self.nickname} ({self.kind.value})"


def parse_watchlist(data: dict) -> List[WatchedIdentifier]:
    """Build the ordered watchlist from a ``/balances`` response.

    Addresses come first, then pubkeys, each in service order. Either list
    may be missing or null. Duplicate identifiers keep the first entry.
    """
    entries = [WatchedIdentifier.from_address_dict(a) for a in data.get("addresses") or []]
    entries += [WatchedIdentifier.from_pubkey_dict(p) for p in data.get("pubkeys") or []]

    watchlist = []
    seen = set()
    for entry in entries:
        if entry.identifier in seen:
            logger.warning(f"[Models] Duplicate identifier in watchlist: {entry.identifier}")
            continue
        seen.add(entry.identifier)
        watchlist.append(entry)
    return watchlist


@dataclass(frozen=True)
class BalanceSnapshot:
    """Point-in-time balance read for one identifier."""

    identifier: str
    kind: IdentifierKind
    balance_sat: int
    previous_balance_sat: int
    balance_currency: Decimal
    previous_balance_currency: Decimal
    currency_code: str
    tx_count: int

    @classmethod
    def from_dict(cls, data: dict) -> "BalanceSnapshot":
        """Create instance from the ``reqInfo`` object of ``/balance``."""
        if data.get("Address"):
            identifier, kind = data["Address"], IdentifierKind.ADDRESS
        elif data.get("Pubkey"):
            identifier, kind = data["Pubkey"], IdentifierKind.PUBKEY
        else:
            raise KeyError("Address")

        # Pubkey records name their amounts BalanceFiat/PreviousBalanceFiat
        if kind == IdentifierKind.PUBKEY:
            balance_keys = ("BalanceFiat", "BalanceCurrency")
            previous_keys = ("PreviousBalanceFiat", "PreviousBalanceCurrency")
        else:
            balance_keys = ("BalanceCurrency",)
            previous_keys = ("PreviousBalanceCurrency",)

        return cls(
            identifier=identifier,
            kind=kind,
            balance_sat=int(data["BalanceSat"]),
            previous_balance_sat=int(data["PreviousBalanceSat"]),
            balance_currency=_amount(data, *balance_keys),
            previous_balance_currency=_amount(data, *previous_keys),
            currency_code=data.get("Currency") or "",
            tx_count=int(data.get("TXCount") or 0),
        )

    @property
    def balance_change_sat(self) -> int:
        """Difference between the current and previous balance."""
        return self.balance_sat - self.previous_balance_sat

    @property
    def balance_text(self) -> str:
        return f"{self.balance_sat} satoshis"

    @property
    def previous_balance_text(self) -> str:
        return f"{self.previous_balance_sat} satoshis"

    @property
    def value_text(self) -> str:
        return f"{self.balance_currency} {self.currency_code}".strip()

    @property
    def previous_value_text(self) -> str:
        return f"{self.previous_balance_currency} {self.currency_code}".strip()

    def summary_lines(self) -> List[str]:
        """Detail panel lines, in display order."""
        return [
            f"{self.kind.display_name}: {self.identifier}",
            f"Balance: {self.balance_text}",
            f"Previous Balance: {self.previous_balance_text}",
            f"Value: {self.value_text}",
            f"Previous Value: {self.previous_value_text}",
            f"Transactions: {self.tx_count}",
        ]


@dataclass
class ServerHealth:
    """Server health check result."""

    is_healthy: bool
    status_code: Optional[int]
    response_time_ms: float
    message: str
    base_url: str

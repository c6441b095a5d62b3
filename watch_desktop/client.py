"""HTTP client for the balance watch service.

This module handles all communication with the backend server. Every
method blocks, so the dashboard runs them through a request runner.
Transport and parsing failures are raised as ``FetchError``.
"""

import logging
import time
from typing import List

import requests
from requests.exceptions import ConnectionError, Timeout, RequestException

from .exceptions import FetchError, ValidationError
from .models import BalanceSnapshot, ServerHealth, WatchedIdentifier, parse_watchlist

logger = logging.getLogger(__name__)


def _normalize_errors(errors) -> List[str]:
    """The service sends ``errors`` as a string or as a list."""
    if not errors:
        return []
    if isinstance(errors, str):
        return [errors]
    return [str(e) for e in errors if e]


class WatchClient:
    """HTTP client for the balance watch API."""

    def __init__(self, base_url: str = "http://127.0.0.1:8080", timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout  # seconds

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        """Issue a request, converting transport errors to FetchError."""
        url = f"{self.base_url}{path}"
        start_time = time.time()
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
        except ConnectionError:
            raise FetchError(f"Connection failed: Is the server running at {self.base_url}?")
        except Timeout:
            raise FetchError(f"Request timed out after {self.timeout}s")
        except RequestException as e:
            raise FetchError(f"Request error: {e}")
        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"[WatchClient] {method} {path} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        try:
            response.raise_for_status()
        except RequestException as e:
            raise FetchError(f"Request error: {e}", status_code=response.status_code)

    def fetch_watchlist(self) -> List[WatchedIdentifier]:
        """Fetch all watched identifiers from ``GET /balances``.

        Returns:
            Ordered list of watched identifiers, addresses first

        Raises:
            FetchError: server unreachable or response malformed
        """
        response = self._send("GET", "/balances")
        self._raise_for_status(response)
        try:
            return parse_watchlist(response.json())
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise FetchError(f"Invalid response format: {e}", status_code=response.status_code)

    def fetch_balance(self, identifier: str) -> BalanceSnapshot:
        """Fetch the balance snapshot of one identifier from ``POST /balance``.

        Args:
            identifier: Address or pubkey

        Returns:
            BalanceSnapshot for the identifier

        Raises:
            FetchError: server unreachable, identifier unknown, or response malformed
        """
        response = self._send("POST", "/balance", json={"Identifier": identifier})
        if response.status_code == 204:
            raise FetchError(f"No balance information for {identifier}", status_code=204)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not response.ok:
            errors = _normalize_errors(data.get("errors")) if isinstance(data, dict) else []
            if errors:
                raise FetchError("; ".join(errors), status_code=response.status_code)
        self._raise_for_status(response)

        try:
            return BalanceSnapshot.from_dict(data["reqInfo"])
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise FetchError(f"Invalid response format: {e}", status_code=response.status_code)

    def add_watch(self, identifier: str, nickname: str) -> None:
        """Start watching an identifier with ``POST /watch``.

        Raises:
            ValidationError: the service rejected the request with ``errors``
            FetchError: server unreachable or failed without an error list
        """
        response = self._send(
            "POST",
            "/watch",
            json={"Identifier": identifier, "Nickname": nickname},
        )
        if response.ok:
            return

        try:
            data = response.json()
        except ValueError:
            data = None
        errors = _normalize_errors(data.get("errors")) if isinstance(data, dict) else []
        if errors:
            raise ValidationError(errors)
        raise FetchError(
            f"Add failed: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    def remove_identifier(self, identifier: str) -> bool:
        """Stop watching an identifier with ``DELETE /identifier``.

        Returns:
            The service's success flag

        Raises:
            FetchError: server unreachable or response is not a boolean
        """
        response = self._send("DELETE", "/identifier", json={"Identifier": identifier})
        self._raise_for_status(response)
        try:
            result = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid response format: {e}", status_code=response.status_code)
        if not isinstance(result, bool):
            raise FetchError(
                f"Invalid response format: expected boolean, got {result!r}",
                status_code=response.status_code,
            )
        return result

    def check_health(self) -> ServerHealth:
        """Check if the server is reachable with detailed health info.

        Returns:
            ServerHealth with detailed status information
        """
        start_time = time.time()
        try:
            response = requests.get(f"{self.base_url}/", timeout=5)
        except ConnectionError:
            return self._health(start_time, None, "Connection refused - server not running")
        except Timeout:
            return self._health(start_time, None, "Connection timed out")
        except RequestException as e:
            return self._health(start_time, None, str(e))

        if response.status_code == 200:
            return self._health(start_time, 200, "Server is healthy")
        return self._health(
            start_time,
            response.status_code,
            f"Unexpected status code: {response.status_code}",
        )

    def _health(self, start_time: float, status_code, message: str) -> ServerHealth:
        return ServerHealth(
            is_healthy=status_code == 200,
            status_code=status_code,
            response_time_ms=(time.time() - start_time) * 1000,
            message=message,
            base_url=self.base_url,
        )

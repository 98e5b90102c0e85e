"""
HTTP realtime price oracle.
"""

import logging
from typing import Any, Iterable, Optional

import requests

from trade_alerts.errors import OracleError
from .oracle import PriceOracle

logger = logging.getLogger(__name__)


class HttpPriceOracle(PriceOracle):
    """
    Fetches prices from a JSON realtime price endpoint.

    Each symbol is requested as ``GET {endpoint}?symbol=<symbol>`` and the
    response body must be a JSON object with a numeric ``price`` field.
    A 404 means the provider does not know the symbol.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the oracle.

        Args:
            endpoint: Realtime price URL
            api_key: Bearer token sent with every request
            timeout: Per-request timeout in seconds
            session: Session to reuse; a new one is created if omitted
        """
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def request_real_time_price(self, symbol: str) -> Optional[float]:
        """
        Request the current price of one symbol.

        Returns:
            Price, or None if the provider does not know the symbol

        Raises:
            OracleError: On network errors, error responses or malformed bodies
        """
        try:
            response = self.session.get(
                self.endpoint,
                params={"symbol": symbol},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OracleError(f"Price request failed for {symbol}: {e}") from e

        if response.status_code == 404:
            return None
        if not response.ok:
            raise OracleError(
                f"Price request failed for {symbol}: "
                f"HTTP {response.status_code}: {response.text}"
            )

        try:
            body: Any = response.json()
        except ValueError as e:
            raise OracleError(f"Malformed price response for {symbol}") from e

        price = body.get("price") if isinstance(body, dict) else None
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise OracleError(f"Malformed price response for {symbol}: {body!r}")
        return float(price)

    def fetch_prices_for_symbols(self, symbols: Iterable[str]) -> dict[str, float]:
        """Fetch current prices for multiple symbols."""
        results = {}
        for symbol in sorted(set(symbols)):
            logger.debug(f"Fetching price for {symbol}")
            price = self.request_real_time_price(symbol)
            if price is None:
                logger.warning(f"Unknown symbol {symbol}, skipping")
                continue
            results[symbol] = price
        return results

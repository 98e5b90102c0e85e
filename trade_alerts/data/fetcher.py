"""
Yahoo Finance price oracle.
"""

import logging
from typing import Iterable, Optional

import yfinance as yf

from trade_alerts.errors import OracleError
from .oracle import PriceOracle

logger = logging.getLogger(__name__)


class YahooFinancePriceOracle(PriceOracle):
    """Fetches current prices from Yahoo Finance."""

    def __init__(self, symbol_map: Optional[dict[str, str]] = None):
        """
        Initialize the oracle.

        Args:
            symbol_map: Alert symbol to Yahoo ticker overrides,
                e.g. {"aud/chf": "AUDCHF=X"}
        """
        self.symbol_map = dict(symbol_map or {})

    def to_ticker(self, symbol: str) -> str:
        """Translate an alert symbol into a Yahoo ticker."""
        return self.symbol_map.get(symbol, symbol)

    def get_current_price(self, symbol: str) -> Optional[float]:
        """
        Fetch the current price of one symbol.

        Args:
            symbol: Alert symbol (e.g., "AAPL")

        Returns:
            Current price, or None if Yahoo has no data for the symbol

        Raises:
            OracleError: If the request fails
        """
        ticker = self.to_ticker(symbol)
        try:
            info = yf.Ticker(ticker).info
        except Exception as e:
            raise OracleError(f"Yahoo Finance request failed for {ticker}: {e}") from e

        if not info:
            return None

        # Use regularMarketPrice if available, otherwise fall back to previousClose
        price = info.get("regularMarketPrice")
        if price is None:
            price = info.get("previousClose")
        if price is None:
            return None

        try:
            return float(price)
        except (TypeError, ValueError) as e:
            raise OracleError(f"Malformed price for {ticker}: {price!r}") from e

    def fetch_prices_for_symbols(self, symbols: Iterable[str]) -> dict[str, float]:
        """Fetch current prices for multiple symbols."""
        results = {}
        for symbol in sorted(set(symbols)):
            price = self.get_current_price(symbol)
            if price is None:
                logger.warning(f"No price available for {symbol}, skipping")
                continue
            results[symbol] = price
        return results

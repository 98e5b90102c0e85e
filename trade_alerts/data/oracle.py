"""
Price oracle interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class PriceOracle(ABC):
    """Source of current prices for a set of symbols."""

    @abstractmethod
    def fetch_prices_for_symbols(self, symbols: Iterable[str]) -> dict[str, float]:
        """
        Fetch current prices.

        Args:
            symbols: Symbols to price; duplicates collapse, order is irrelevant

        Returns:
            Mapping of symbol to price. Symbols the provider cannot resolve
            are omitted.

        Raises:
            OracleError: If the provider is unreachable or returns malformed data
        """
        pass

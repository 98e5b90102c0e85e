"""
Data models for trade alerts.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from trade_alerts.utils.hashing import (
    DEFAULT_HASH_PREFIX,
    Hash,
    HashComponents,
    generate_hash,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class TriggerDirection(Enum):
    """Side of the price level an alert watches."""

    ABOVE = "above"  # trigger when price >= level
    BELOW = "below"  # trigger when price <= level

    @classmethod
    def parse(cls, value: str) -> "TriggerDirection":
        """
        Parse a direction name.

        Accepts "above"/"below" as well as the trade-side names used by
        older alert tables: "sell" (at or above) and "buy" (at or below).

        Raises:
            ValueError: If the name is not recognised
        """
        normalized = value.strip().lower()
        aliases = {"sell": cls.ABOVE, "buy": cls.BELOW}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


@dataclass
class Alert:
    """A user's price-level watch on a symbol."""

    hash: Hash
    price_level: float
    symbol: str
    user_id: str
    direction: Optional[TriggerDirection] = None  # None = evaluator default

    @classmethod
    def create(
        cls,
        price_level: float,
        user_id: str,
        symbol: str,
        direction: Optional[TriggerDirection] = None,
        prefix: str = DEFAULT_HASH_PREFIX,
    ) -> "Alert":
        """Build an alert and derive its hash."""
        components = HashComponents(
            price_level=price_level, user_id=user_id, symbol=symbol
        )
        return cls(
            hash=generate_hash(components, prefix=prefix),
            price_level=price_level,
            symbol=symbol,
            user_id=user_id,
            direction=direction,
        )


@dataclass
class TableConfig:
    """Names of the alert table and its columns."""

    table: str = "alerts"
    hash_column: str = "hash"
    price_column: str = "price_level"
    user_column: str = "user_id"
    symbol_column: str = "symbol"
    direction_column: str = "initial_direction"

    def columns(self) -> list[str]:
        """Column names in storage order."""
        return [
            self.hash_column,
            self.price_column,
            self.user_column,
            self.symbol_column,
            self.direction_column,
        ]

    def invalid_names(self) -> list[str]:
        """Return table/column names that are not plain SQL identifiers."""
        names = [self.table, *self.columns()]
        return [name for name in names if not _IDENTIFIER.match(name or "")]

"""
Deterministic alert identity.
"""

import hashlib
from dataclasses import dataclass

DEFAULT_HASH_PREFIX = "xlx-a-"

# ASCII unit separator, never part of a user id or symbol
_FIELD_SEPARATOR = "\x1f"


def canonical_price(price_level: float) -> str:
    """
    Exact text form of a price level.

    repr() of a float round-trips, so distinct levels never share a form.
    -0.0 is folded into 0.0 since the two compare equal.
    """
    price = float(price_level)
    if price == 0.0:
        price = 0.0
    return repr(price)


@dataclass(frozen=True)
class Hash:
    """Opaque alert identifier."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashComponents:
    """Fields an alert hash is derived from."""

    price_level: float
    user_id: str
    symbol: str

    def canonical(self) -> str:
        """Return the canonical text the hash is computed over."""
        return _FIELD_SEPARATOR.join(
            [self.user_id, self.symbol, canonical_price(self.price_level)]
        )

    def generate_hash(self, prefix: str = DEFAULT_HASH_PREFIX) -> Hash:
        return generate_hash(self, prefix=prefix)


def generate_hash(
    components: HashComponents, prefix: str = DEFAULT_HASH_PREFIX
) -> Hash:
    """
    Generate the hash identifying an alert.

    The result depends only on the price level, user id and symbol, so
    creating the same alert twice yields the same hash.

    Args:
        components: Alert fields to hash
        prefix: String prepended to the hex digest

    Returns:
        Hash of the form "{prefix}{sha256 hex digest}"
    """
    digest = hashlib.sha256(components.canonical().encode("utf-8")).hexdigest()
    return Hash(f"{prefix}{digest}")

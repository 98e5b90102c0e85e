"""
Error types raised at the price source and alert store boundaries.
"""


class TradeAlertsError(Exception):
    """Base class for trade alert errors."""

    pass


class OracleError(TradeAlertsError):
    """Raised when the price provider is unreachable or returns unusable data."""

    pass


class RepositoryError(TradeAlertsError):
    """Raised when the alert store fails (connectivity, schema, closed connection)."""

    pass


class NotFoundError(RepositoryError):
    """Raised when a requested alert hash is not in the store."""

    def __init__(self, hash_value: str):
        super().__init__(f"Alert not found: {hash_value}")
        self.hash = hash_value

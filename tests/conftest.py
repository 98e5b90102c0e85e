"""
Pytest configuration and shared fixtures.
"""

import pytest

from trade_alerts.database.connection import Database
from trade_alerts.database.models import TableConfig
from trade_alerts.database.repository import SqliteAlertRepository


@pytest.fixture
def table_config():
    """Default alert table configuration."""
    return TableConfig()


@pytest.fixture
def db(table_config):
    """Create in-memory database with schema."""
    db = Database(":memory:")
    db.initialize(table_config)
    yield db
    db.close()


@pytest.fixture
def repo(db):
    """SQLite alert repository on the in-memory database."""
    return SqliteAlertRepository(db)


@pytest.fixture
def sample_stock_info():
    """Sample Yahoo Finance stock info response."""
    return {
        "regularMarketPrice": 175.50,
        "previousClose": 173.25,
        "open": 174.00,
        "dayHigh": 176.00,
        "dayLow": 173.50,
        "volume": 50_000_000,
        "shortName": "Apple Inc.",
        "exchange": "NASDAQ",
    }

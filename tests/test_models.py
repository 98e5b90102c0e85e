"""
Data model tests.
Tests for dataclass models and direction parsing.
"""

import pytest

from trade_alerts.database.models import Alert, TableConfig, TriggerDirection
from trade_alerts.utils.hashing import Hash, HashComponents, generate_hash


class TestAlertModel:
    """Test Alert model."""

    def test_create_alert(self):
        """Should create an alert with all fields."""
        alert = Alert(
            hash=Hash("1234"),
            price_level=1.09,
            symbol="EURUSD",
            user_id="1234",
        )
        assert alert.hash == Hash("1234")
        assert alert.price_level == 1.09
        assert alert.symbol == "EURUSD"
        assert alert.user_id == "1234"
        assert alert.direction is None

    def test_empty_strings_accepted(self):
        """Should not validate user id or symbol."""
        alert = Alert(hash=Hash(""), price_level=0.0, symbol="", user_id="")
        assert alert.symbol == ""

    def test_create_derives_hash(self):
        """Alert.create should hash price level, user id and symbol."""
        alert = Alert.create(price_level=100.0, user_id="u1", symbol="AAPL")
        expected = generate_hash(HashComponents(100.0, "u1", "AAPL"))
        assert alert.hash == expected

    def test_create_ignores_direction_for_hash(self):
        """Direction is not part of the alert identity."""
        above = Alert.create(100.0, "u1", "AAPL", direction=TriggerDirection.ABOVE)
        below = Alert.create(100.0, "u1", "AAPL", direction=TriggerDirection.BELOW)
        assert above.hash == below.hash


class TestTriggerDirection:
    """Test direction parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("above", TriggerDirection.ABOVE),
            ("below", TriggerDirection.BELOW),
            ("sell", TriggerDirection.ABOVE),
            ("buy", TriggerDirection.BELOW),
            (" Above ", TriggerDirection.ABOVE),
            ("BUY", TriggerDirection.BELOW),
        ],
    )
    def test_parse(self, value, expected):
        """Should accept both naming schemes."""
        assert TriggerDirection.parse(value) == expected

    def test_parse_unknown(self):
        """Should reject unknown directions."""
        with pytest.raises(ValueError):
            TriggerDirection.parse("sideways")


class TestTableConfig:
    """Test TableConfig model."""

    def test_defaults(self):
        """Should default to the standard alert table layout."""
        config = TableConfig()
        assert config.table == "alerts"
        assert config.columns() == [
            "hash",
            "price_level",
            "user_id",
            "symbol",
            "initial_direction",
        ]

    def test_custom_names(self):
        """Should hold custom names."""
        config = TableConfig(
            table="price_alerts",
            hash_column="alert_hash",
            price_column="level",
            user_column="owner",
            symbol_column="pair",
        )
        assert config.columns()[:4] == ["alert_hash", "level", "owner", "pair"]
        assert config.invalid_names() == []

    def test_invalid_names(self):
        """Should report names that are not SQL identifiers."""
        config = TableConfig(table="alerts; DROP TABLE x", symbol_column="1sym")
        assert config.invalid_names() == ["alerts; DROP TABLE x", "1sym"]

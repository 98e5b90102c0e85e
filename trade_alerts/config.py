"""
Configuration loading and validation.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from trade_alerts.data.fetcher import YahooFinancePriceOracle
from trade_alerts.data.http import HttpPriceOracle
from trade_alerts.data.oracle import PriceOracle
from trade_alerts.database.models import TableConfig, TriggerDirection
from trade_alerts.utils.hashing import DEFAULT_HASH_PREFIX

PROVIDERS = ("yahoo_finance", "http")


class ConfigValidationError(Exception):
    """Raised when configuration is invalid."""

    pass


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: str = "data/alerts.db"


@dataclass
class PriceSourceConfig:
    """Price provider configuration."""

    provider: str = "yahoo_finance"
    endpoint: Optional[str] = None
    api_key: str = ""
    timeout_seconds: float = 10
    symbol_map: dict[str, str] = field(default_factory=dict)


@dataclass
class AlertsConfig:
    """Alert identity and evaluation settings."""

    hash_prefix: str = DEFAULT_HASH_PREFIX
    default_direction: str = "above"

    @property
    def direction(self) -> TriggerDirection:
        return TriggerDirection.parse(self.default_direction)


@dataclass
class AdvancedConfig:
    """Advanced configuration."""

    log_level: str = "INFO"


@dataclass
class AppConfig:
    """Main application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    table: TableConfig = field(default_factory=TableConfig)
    price_source: PriceSourceConfig = field(default_factory=PriceSourceConfig)
    alerts: AlertsConfig = field(default_factory=AlertsConfig)
    advanced: AdvancedConfig = field(default_factory=AdvancedConfig)


def _substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in string values."""
    if isinstance(value, str):
        # Match ${VAR_NAME} pattern
        pattern = r"\$\{([^}]+)\}"
        matches = re.findall(pattern, value)
        for var_name in matches:
            env_value = os.environ.get(var_name, "")
            value = value.replace(f"${{{var_name}}}", env_value)
        return value
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def _validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values."""
    # Check database path is provided
    db_config = config_dict.get("database") or {}
    db_path = db_config.get("path", DatabaseConfig.path)
    if not db_path:
        raise ConfigValidationError("Database path is required")

    if db_path != ":memory:":
        parent = Path(db_path).parent
        if parent.exists() and not os.access(parent, os.W_OK):
            raise ConfigValidationError(f"Database path not writable: {parent}")

    # Check table names
    table = TableConfig(**(config_dict.get("table") or {}))
    invalid = table.invalid_names()
    if invalid:
        raise ConfigValidationError(f"Invalid table or column names: {invalid}")

    # Check price provider
    source = config_dict.get("price_source") or {}
    provider = source.get("provider", "yahoo_finance")
    if provider not in PROVIDERS:
        raise ConfigValidationError(f"Unknown price provider: {provider}")
    if provider == "http" and not source.get("endpoint"):
        raise ConfigValidationError("Price endpoint is required for http provider")

    # Check default direction
    alerts = config_dict.get("alerts") or {}
    direction = alerts.get("default_direction", "above")
    try:
        TriggerDirection.parse(str(direction))
    except ValueError:
        raise ConfigValidationError(f"Invalid default direction: {direction}")

    # Check log level
    advanced = config_dict.get("advanced") or {}
    log_level = advanced.get("log_level", "INFO")
    # getLevelName returns an int only for registered level names
    if not isinstance(logging.getLevelName(str(log_level).upper()), int):
        raise ConfigValidationError(f"Invalid log level: {log_level}")


def load_config(config_path: str) -> AppConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig instance

    Raises:
        ConfigValidationError: If configuration is invalid
        FileNotFoundError: If config file doesn't exist
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    # Substitute environment variables
    config_dict = _substitute_env_vars(raw_config)

    # Validate
    _validate_config(config_dict)

    return AppConfig(
        database=DatabaseConfig(**(config_dict.get("database") or {})),
        table=TableConfig(**(config_dict.get("table") or {})),
        price_source=PriceSourceConfig(**(config_dict.get("price_source") or {})),
        alerts=AlertsConfig(**(config_dict.get("alerts") or {})),
        advanced=AdvancedConfig(**(config_dict.get("advanced") or {})),
    )


def build_price_oracle(config: AppConfig) -> PriceOracle:
    """Create the price oracle selected by the configuration."""
    source = config.price_source
    if source.provider == "http":
        return HttpPriceOracle(
            endpoint=source.endpoint or "",
            api_key=source.api_key,
            timeout=source.timeout_seconds,
        )
    elif source.provider == "yahoo_finance":
        return YahooFinancePriceOracle(symbol_map=source.symbol_map)
    else:
        raise ConfigValidationError(f"Unknown price provider: {source.provider}")

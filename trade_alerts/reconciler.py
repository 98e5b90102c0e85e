"""
Reconciliation workflow: fetch prices, find triggered alerts, delete them.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from trade_alerts.data.oracle import PriceOracle
from trade_alerts.database.models import Alert, TableConfig, TriggerDirection
from trade_alerts.database.repository import AlertRepository
from trade_alerts.rules.engine import TriggerEvaluator
from trade_alerts.utils.hashing import DEFAULT_HASH_PREFIX, Hash

logger = logging.getLogger(__name__)


@dataclass
class PassResult:
    """Outcome of one reconciliation pass."""

    triggered: set[Hash] = field(default_factory=set)
    deleted: bool = False


def register_alert(
    repository: AlertRepository,
    config: TableConfig,
    price_level: float,
    user_id: str,
    symbol: str,
    direction: Optional[TriggerDirection] = None,
    prefix: str = DEFAULT_HASH_PREFIX,
) -> Alert:
    """Create an alert, derive its hash and persist it."""
    alert = Alert.create(
        price_level=price_level,
        user_id=user_id,
        symbol=symbol,
        direction=direction,
        prefix=prefix,
    )
    repository.add_alert(alert, config)
    logger.info(f"Registered alert {alert.hash} ({symbol} @ {price_level})")
    return alert


class AlertReconciler:
    """Fetches prices, finds triggered alerts and removes them."""

    def __init__(
        self,
        oracle: PriceOracle,
        evaluator: Optional[TriggerEvaluator] = None,
    ):
        """
        Initialize reconciler.

        Args:
            oracle: Price source
            evaluator: Trigger evaluator; defaults to one watching "above"
        """
        self.oracle = oracle
        self.evaluator = evaluator or TriggerEvaluator()

    def check_and_fetch_triggered_alert_hashes(
        self,
        repository: AlertRepository,
        config: TableConfig,
        symbols: Optional[Iterable[str]] = None,
    ) -> set[Hash]:
        """
        Find the alerts whose trigger condition is met.

        Nothing is deleted here.

        Args:
            repository: Alert store
            config: Alert table configuration
            symbols: Restrict the check to these symbols; all stored
                symbols are checked if omitted

        Returns:
            Hashes of triggered alerts

        Raises:
            OracleError: If prices cannot be fetched
            RepositoryError: If the store fails
        """
        stored_symbols = repository.fetch_unique_symbols(config)
        if symbols is not None:
            stored_symbols = stored_symbols & set(symbols)

        if not stored_symbols:
            logger.debug("No alerts to check")
            return set()

        logger.debug(f"Fetching prices for {sorted(stored_symbols)}")
        prices = self.oracle.fetch_prices_for_symbols(stored_symbols)
        logger.debug(f"Fetched prices: {prices}")

        alerts = [
            alert
            for alert in repository.fetch_all_alerts(config)
            if alert.symbol in stored_symbols
        ]
        triggered = self.evaluator.evaluate(alerts, prices)
        logger.info(f"{len(triggered)} of {len(alerts)} alerts triggered")
        return triggered

    def delete_triggered_alerts_by_hashes(
        self,
        repository: AlertRepository,
        config: TableConfig,
        hashes: Iterable[Hash],
    ) -> None:
        """
        Delete triggered alerts.

        Raises:
            RepositoryError: If the store fails
        """
        hashes = set(hashes)
        if not hashes:
            return
        repository.delete_alerts_by_hashes(hashes, config)
        for hash_value in sorted(str(h) for h in hashes):
            logger.info(f"Deleted triggered alert {hash_value}")

    def run_pass(
        self,
        repository: AlertRepository,
        config: TableConfig,
        dry_run: bool = False,
    ) -> PassResult:
        """Run one check and, unless dry_run, delete what triggered."""
        triggered = self.check_and_fetch_triggered_alert_hashes(repository, config)
        if dry_run:
            for hash_value in sorted(str(h) for h in triggered):
                logger.info(f"Dry run - would delete {hash_value}")
            return PassResult(triggered=triggered, deleted=False)

        self.delete_triggered_alerts_by_hashes(repository, config, triggered)
        return PassResult(triggered=triggered, deleted=bool(triggered))

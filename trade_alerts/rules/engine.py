"""
Trigger evaluation engine.
"""

from typing import Iterable, Mapping

from trade_alerts.database.models import Alert, TriggerDirection
from trade_alerts.utils.hashing import Hash

__all__ = ["TriggerEvaluator", "TriggerDirection"]


class TriggerEvaluator:
    """Matches alerts against a price snapshot."""

    def __init__(self, default_direction: TriggerDirection = TriggerDirection.ABOVE):
        """
        Initialize evaluator.

        Args:
            default_direction: Direction for alerts that don't carry one
        """
        self.default_direction = default_direction

    def direction_for(self, alert: Alert) -> TriggerDirection:
        return alert.direction or self.default_direction

    def is_triggered(self, alert: Alert, current_price: float) -> bool:
        """Check whether a price is on or past the alert's level."""
        direction = self.direction_for(alert)
        if direction == TriggerDirection.ABOVE:
            return current_price >= alert.price_level
        return current_price <= alert.price_level

    def evaluate(
        self,
        alerts: Iterable[Alert],
        prices: Mapping[str, float],
    ) -> set[Hash]:
        """
        Compute the hashes of triggered alerts.

        Alerts whose symbol has no price in the snapshot are skipped and
        will be evaluated again on the next pass.

        Args:
            alerts: Alerts to evaluate
            prices: Current price per symbol

        Returns:
            Set of triggered alert hashes
        """
        triggered = set()

        for alert in alerts:
            current_price = prices.get(alert.symbol)
            if current_price is None:
                continue

            if self.is_triggered(alert, current_price):
                triggered.add(alert.hash)

        return triggered

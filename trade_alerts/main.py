"""
Main application entry point.
"""

import logging
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from trade_alerts.config import ConfigValidationError, build_price_oracle, load_config
from trade_alerts.database.connection import Database
from trade_alerts.database.repository import SqliteAlertRepository
from trade_alerts.errors import TradeAlertsError
from trade_alerts.reconciler import AlertReconciler
from trade_alerts.rules.engine import TriggerEvaluator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Trade alerts reconciliation pass")
    parser.add_argument(
        "--config", default="config.yaml", help="Path to config file"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--dry-run", action="store_true", help="Report triggered alerts without deleting"
    )

    args = parser.parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ConfigValidationError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return 1

    # Setup logging
    log_level = logging.DEBUG if args.debug else config.advanced.log_level.upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # Initialize database
    db = Database(config.database.path)
    try:
        db.initialize(config.table)
        reconciler = AlertReconciler(
            oracle=build_price_oracle(config),
            evaluator=TriggerEvaluator(default_direction=config.alerts.direction),
        )
        result = reconciler.run_pass(
            SqliteAlertRepository(db), config.table, dry_run=args.dry_run
        )
    except TradeAlertsError as e:
        logger.error(f"Reconciliation pass failed: {e}")
        return 1
    finally:
        db.close()

    logger.info(
        f"Pass complete: {len(result.triggered)} triggered, "
        f"{'deleted' if result.deleted else 'nothing deleted'}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

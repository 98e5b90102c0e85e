"""
CLI commands for managing alerts.
"""

import argparse
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from trade_alerts.config import AppConfig, ConfigValidationError, load_config
from trade_alerts.database.connection import Database
from trade_alerts.database.models import Alert, TableConfig, TriggerDirection
from trade_alerts.database.repository import SqliteAlertRepository
from trade_alerts.errors import NotFoundError, TradeAlertsError
from trade_alerts.reconciler import register_alert
from trade_alerts.utils.hashing import Hash

DIRECTION_CHOICES = ["above", "below", "buy", "sell"]


def add_alert(
    db: Database,
    config: AppConfig,
    user_id: str,
    symbol: str,
    price_level: float,
    direction: Optional[str] = None,
) -> Alert:
    """Register a new alert."""
    return register_alert(
        SqliteAlertRepository(db),
        config.table,
        price_level=price_level,
        user_id=user_id,
        symbol=symbol,
        direction=TriggerDirection.parse(direction) if direction else None,
        prefix=config.alerts.hash_prefix,
    )


def list_alerts(db: Database, table: TableConfig, user_id: str) -> list[Hash]:
    """List the hashes of a user's alerts."""
    return SqliteAlertRepository(db).fetch_hashes_by_user_id(user_id, table)


def show_alert(db: Database, table: TableConfig, hash_value: str) -> Alert:
    """Load alert details by hash."""
    return SqliteAlertRepository(db).fetch_details_by_hash(Hash(hash_value), table)


def delete_alerts(db: Database, table: TableConfig, hash_values: list[str]) -> None:
    """Delete alerts by hash."""
    SqliteAlertRepository(db).delete_alerts_by_hashes(
        {Hash(h) for h in hash_values}, table
    )


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Trade alerts CLI")
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("--db", help="Database path (overrides config)")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # Alert commands
    alert_parser = subparsers.add_parser("alert", help="Alert management")
    alert_subparsers = alert_parser.add_subparsers(dest="action")

    add_parser = alert_subparsers.add_parser("add", help="Add alert")
    add_parser.add_argument("--user", required=True, help="User ID")
    add_parser.add_argument("--symbol", required=True, help="Symbol, e.g. aud/chf")
    add_parser.add_argument("--price", type=float, required=True, help="Price level")
    add_parser.add_argument("--direction", choices=DIRECTION_CHOICES)

    list_parser = alert_subparsers.add_parser("list", help="List user's alerts")
    list_parser.add_argument("--user", required=True, help="User ID")

    show_parser = alert_subparsers.add_parser("show", help="Show alert details")
    show_parser.add_argument("--hash", required=True, help="Alert hash")

    delete_parser = alert_subparsers.add_parser("delete", help="Delete alerts")
    delete_parser.add_argument(
        "--hash", required=True, action="append", dest="hashes", help="Alert hash"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except (FileNotFoundError, ConfigValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    if args.db:
        config.database.path = args.db

    # Initialize database
    db = Database(config.database.path)
    table = config.table

    try:
        db.initialize(table)

        # Handle commands
        if args.command == "alert":
            if args.action == "add":
                alert = add_alert(
                    db,
                    config,
                    user_id=args.user,
                    symbol=args.symbol,
                    price_level=args.price,
                    direction=args.direction,
                )
                print(f"Created alert: {alert.hash}")
            elif args.action == "list":
                for hash_value in list_alerts(db, table, args.user):
                    print(hash_value)
            elif args.action == "show":
                alert = show_alert(db, table, args.hash)
                direction = alert.direction.value if alert.direction else "default"
                print(
                    f"{alert.hash}: {alert.symbol} @ {alert.price_level} "
                    f"(user: {alert.user_id}, direction: {direction})"
                )
            elif args.action == "delete":
                delete_alerts(db, table, args.hashes)
                print(f"Deleted {len(set(args.hashes))} alert(s)")
            else:
                alert_parser.print_help()
        else:
            parser.print_help()
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    except TradeAlertsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Alert repository interface and its SQLite implementation.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator

from trade_alerts.errors import NotFoundError, RepositoryError
from trade_alerts.utils.hashing import Hash
from .connection import Database
from .models import Alert, TableConfig, TriggerDirection

logger = logging.getLogger(__name__)


class AlertRepository(ABC):
    """Persistent store of alerts, keyed by hash."""

    @abstractmethod
    def add_alert(self, alert: Alert, config: TableConfig) -> None:
        """
        Insert an alert, or do nothing if its hash is already stored.

        Raises:
            RepositoryError: If the store fails
        """
        pass

    @abstractmethod
    def fetch_hashes_by_user_id(self, user_id: str, config: TableConfig) -> list[Hash]:
        """Return all hashes owned by a user (empty list if none)."""
        pass

    @abstractmethod
    def fetch_details_by_hash(self, hash: Hash, config: TableConfig) -> Alert:
        """
        Load a single alert.

        Raises:
            NotFoundError: If no alert has this hash
            RepositoryError: If the store fails
        """
        pass

    @abstractmethod
    def delete_alerts_by_hashes(self, hashes: Iterable[Hash], config: TableConfig) -> None:
        """Delete the given alerts. Hashes that are not stored are ignored."""
        pass

    @abstractmethod
    def fetch_unique_symbols(self, config: TableConfig) -> set[str]:
        """Return the distinct symbols across all stored alerts."""
        pass

    @abstractmethod
    def fetch_all_alerts(self, config: TableConfig) -> list[Alert]:
        """Return every stored alert."""
        pass

    def verify_hash(self, hash: Hash, config: TableConfig) -> bool:
        """Check whether an alert with this hash is stored."""
        try:
            self.fetch_details_by_hash(hash, config)
        except NotFoundError:
            return False
        return True


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Translate sqlite errors into RepositoryError."""
    try:
        yield
    except sqlite3.Error as e:
        raise RepositoryError(f"Failed to {action}: {e}") from e


class SqliteAlertRepository(AlertRepository):
    """CRUD operations for alerts stored in SQLite."""

    def __init__(self, db: Database):
        self.db = db

    def add_alert(self, alert: Alert, config: TableConfig) -> None:
        """Upsert an alert keyed by hash."""
        self._check_config(config)
        with _store_errors("add alert"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"""
                INSERT INTO {config.table} (
                    {config.hash_column}, {config.price_column},
                    {config.user_column}, {config.symbol_column},
                    {config.direction_column}
                )
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT({config.hash_column}) DO NOTHING
                """,
                (
                    alert.hash.value,
                    alert.price_level,
                    alert.user_id,
                    alert.symbol,
                    alert.direction.value if alert.direction else None,
                ),
            )
            self.db.connection.commit()
        logger.debug(f"Stored alert {alert.hash} for {alert.symbol}")

    def fetch_hashes_by_user_id(self, user_id: str, config: TableConfig) -> list[Hash]:
        """Get all alert hashes for a user."""
        self._check_config(config)
        with _store_errors("fetch hashes"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"""
                SELECT {config.hash_column} FROM {config.table}
                WHERE {config.user_column} = ?
                ORDER BY {config.hash_column}
                """,
                (user_id,),
            )
            return [Hash(row[0]) for row in cursor.fetchall()]

    def fetch_details_by_hash(self, hash: Hash, config: TableConfig) -> Alert:
        """Get alert by hash."""
        self._check_config(config)
        with _store_errors("fetch alert details"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"SELECT * FROM {config.table} WHERE {config.hash_column} = ?",
                (hash.value,),
            )
            row = cursor.fetchone()
        if row is None:
            raise NotFoundError(hash.value)
        return self._row_to_alert(row, config)

    def delete_alerts_by_hashes(self, hashes: Iterable[Hash], config: TableConfig) -> None:
        """Delete all given hashes in a single statement."""
        self._check_config(config)
        values = sorted({h.value for h in hashes})
        if not values:
            return

        placeholders = ", ".join("?" for _ in values)
        with _store_errors("delete alerts"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"""
                DELETE FROM {config.table}
                WHERE {config.hash_column} IN ({placeholders})
                """,
                values,
            )
            self.db.connection.commit()
        logger.debug(f"Deleted {cursor.rowcount} of {len(values)} alerts")

    def fetch_unique_symbols(self, config: TableConfig) -> set[str]:
        """Get the distinct symbols that have alerts."""
        self._check_config(config)
        with _store_errors("fetch symbols"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"SELECT DISTINCT {config.symbol_column} FROM {config.table}"
            )
            return {row[0] for row in cursor.fetchall()}

    def fetch_all_alerts(self, config: TableConfig) -> list[Alert]:
        """List all alerts."""
        self._check_config(config)
        with _store_errors("fetch alerts"):
            cursor = self.db.connection.cursor()
            cursor.execute(
                f"SELECT * FROM {config.table} ORDER BY {config.hash_column}"
            )
            rows = cursor.fetchall()
        return [self._row_to_alert(row, config) for row in rows]

    def _check_config(self, config: TableConfig) -> None:
        invalid = config.invalid_names()
        if invalid:
            raise RepositoryError(f"Invalid table config names: {invalid}")

    def _row_to_alert(self, row, config: TableConfig) -> Alert:
        """Convert database row to Alert."""
        direction = None
        raw_direction = row[config.direction_column]
        if raw_direction:
            try:
                direction = TriggerDirection.parse(raw_direction)
            except ValueError:
                logger.warning(
                    f"Unknown direction {raw_direction!r} for alert "
                    f"{row[config.hash_column]}, using evaluator default"
                )

        return Alert(
            hash=Hash(row[config.hash_column]),
            price_level=row[config.price_column],
            symbol=row[config.symbol_column],
            user_id=row[config.user_column],
            direction=direction,
        )

"""
SQLite database connection and schema management.
"""

import sqlite3
from pathlib import Path
from typing import Optional

from trade_alerts.database.models import TableConfig
from trade_alerts.errors import RepositoryError


class Database:
    """SQLite database connection manager."""

    def __init__(self, db_path: str):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file, or ":memory:" for in-memory DB.
        """
        self.db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None
        self._connect()

    def _connect(self) -> None:
        """Establish database connection."""
        if self.db_path != ":memory:":
            # Ensure parent directory exists
            path = Path(self.db_path)
            path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = sqlite3.connect(self.db_path)
        self._connection.row_factory = sqlite3.Row

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the database connection."""
        if self._connection is None:
            raise sqlite3.ProgrammingError("Database connection is closed")
        return self._connection

    def initialize(self, config: Optional[TableConfig] = None) -> None:
        """
        Create the alert table if it doesn't exist.

        Args:
            config: Table and column names; defaults to TableConfig()

        Raises:
            RepositoryError: If a configured name is not a valid identifier
        """
        config = config or TableConfig()
        invalid = config.invalid_names()
        if invalid:
            raise RepositoryError(f"Invalid table config names: {invalid}")

        cursor = self.connection.cursor()
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {config.table} (
                {config.hash_column} TEXT PRIMARY KEY,
                {config.price_column} REAL NOT NULL,
                {config.user_column} TEXT NOT NULL,
                {config.symbol_column} TEXT NOT NULL,
                {config.direction_column} TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        cursor.execute(f"""
            CREATE INDEX IF NOT EXISTS idx_{config.table}_{config.user_column}
            ON {config.table}({config.user_column})
        """)
        cursor.execute(f"""
            CREATE INDEX IF NOT EXISTS idx_{config.table}_{config.symbol_column}
            ON {config.table}({config.symbol_column})
        """)

        self.connection.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

# database/sqlite_connector.py
"""
SQLite database connector implementation.

This module provides a concrete implementation of the `DatabaseConnector`
for a local SQLite database file (or `":memory:"`). It wraps the standard
`sqlite3` library.
"""

import os
import sqlite3
from typing import List, Tuple, Any, Dict

import structlog

from database.base_connector import DatabaseConnector
from config import DB_FILE

log = structlog.get_logger(__name__)

MEMORY_PATH = ":memory:"


class SQLiteConnector(DatabaseConnector):
    """
    Manages connection and operations for a SQLite database.

    This class fulfills the `DatabaseConnector` contract for SQLite.
    """

    def __init__(self, db_path: str = DB_FILE):
        """
        Initializes the SQLite connector.

        Args:
            - db_path (str): The file path for the SQLite database, or
                             ":memory:". Defaults to the value in `config.py`.
        """
        self.db_path = db_path
        self.conn: sqlite3.Connection | None = None
        self.cursor: sqlite3.Cursor | None = None

    def connect(self):
        """
        Opens the SQLite database and creates a cursor.

        Workflow:
        1.  Creates the parent directory of the database file if needed.
        2.  Calls `sqlite3.connect()` and sets `row_factory` to `sqlite3.Row`
            so rows can be turned into dictionaries keyed by column.
        3.  Creates a cursor and enables foreign key enforcement.
        """
        try:
            if self.db_path != MEMORY_PATH:
                parent = os.path.dirname(self.db_path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
            self.cursor = self.conn.cursor()
            self.execute("PRAGMA foreign_keys = ON;")
            log.info("SQLite connection successful.", path=self.db_path)
        except sqlite3.Error as e:
            log.exception("Failed to connect to SQLite database.", error=str(e))
            raise

    def close(self):
        """Closes the database connection if it is open."""
        if self.conn:
            self.conn.close()
            self.conn = None
            self.cursor = None
            log.info("SQLite connection closed.")

    def _require_cursor(self) -> sqlite3.Cursor:
        if not self.cursor:
            raise ConnectionError("Database not connected. Call connect() first.")
        return self.cursor

    def execute(self, sql: str, params: Tuple[Any, ...] = ()):
        """Executes a single SQL statement using the internal cursor."""
        cursor = self._require_cursor()
        try:
            cursor.execute(sql, tuple(params))
        except sqlite3.Error as e:
            log.error("SQLite execution error.", sql=sql, error=str(e))
            raise

    def fetchall(self) -> List[Dict[str, Any]]:
        """Fetches all rows from the last query as a list of dictionaries."""
        cursor = self._require_cursor()
        return [dict(row) for row in cursor.fetchall()]

    def rowcount(self) -> int:
        return self._require_cursor().rowcount

    def lastrowid(self) -> Any:
        return self._require_cursor().lastrowid

    def commit(self):
        """Commits the current transaction using the connection object."""
        if self.conn:
            self.conn.commit()

    def rollback(self):
        """Rolls back the current transaction using the connection object."""
        if self.conn:
            self.conn.rollback()

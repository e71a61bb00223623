# database/data_store.py
"""
Table-level data access used by the record layer.

`DataStore` turns the five operations records need (select, insert, update,
delete, last insert id) into parameterized SQL and runs it through a
`DatabaseConnector`. Identifiers are checked against a strict pattern and
every value travels as a bound parameter, so callers can only influence the
SQL text through the raw condition string they pass in.
"""

import re
from typing import Any, Dict, List, Mapping, Sequence

import structlog

from database.base_connector import DatabaseConnector

log = structlog.get_logger(__name__)

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_identifier(name: str) -> str:
    """Returns `name` unchanged if it is a plain SQL identifier, else raises ValueError."""
    if not isinstance(name, str) or not IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _where(condition: str) -> str:
    condition = (condition or "").strip()
    return f" WHERE {condition}" if condition else ""


class DataStore:
    """
    Executes table reads and writes through a connector.

    Writes are committed as soon as they succeed unless `autocommit` is off.
    Connector errors are never swallowed: a failing statement raises, while
    a statement that simply matches no rows reports 0.
    """

    def __init__(self, connector: DatabaseConnector, autocommit: bool = True):
        self.connector = connector
        self.autocommit = autocommit

    def __enter__(self) -> "DataStore":
        self.connector.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.connector.close()

    def select(
        self,
        table: str,
        columns: Sequence[str] = ("*",),
        condition: str = "",
        params: Sequence[Any] = (),
    ) -> List[Dict[str, Any]]:
        """
        Returns every row of `table` matching `condition` as dictionaries.

        Args:
            - table (str): Table name.
            - columns (Sequence[str]): Column names, or ["*"] for all columns.
            - condition (str): Raw WHERE predicate with `?` placeholders. Empty
                               means no filtering.
            - params (Sequence[Any]): Values for the placeholders.
        """
        column_list = ", ".join(
            "*" if column == "*" else check_identifier(column) for column in columns
        )
        sql = f"SELECT {column_list or '*'} FROM {check_identifier(table)}{_where(condition)}"
        log.debug("Selecting rows.", table=table, sql=sql)
        self.connector.execute(sql, tuple(params))
        return self.connector.fetchall()

    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        """Inserts one row built from `data` and returns the number of rows affected."""
        table = check_identifier(table)
        if data:
            columns = ", ".join(check_identifier(column) for column in data)
            placeholders = ", ".join("?" for _ in data)
            sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"
        else:
            sql = f"INSERT INTO {table} DEFAULT VALUES"
        return self._write(sql, tuple(data.values()), table=table, operation="insert")

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        condition: str,
        params: Sequence[Any] = (),
    ) -> int:
        """Updates rows matching `condition` with `data`; returns the number of rows affected."""
        table = check_identifier(table)
        if not data:
            log.warning("Update skipped, no columns to write.", table=table)
            return 0
        assignments = ", ".join(f"{check_identifier(column)} = ?" for column in data)
        sql = f"UPDATE {table} SET {assignments}{_where(condition)}"
        values = tuple(data.values()) + tuple(params)
        return self._write(sql, values, table=table, operation="update")

    def delete(self, table: str, condition: str, params: Sequence[Any] = ()) -> int:
        """Deletes rows matching `condition`; returns the number of rows affected."""
        table = check_identifier(table)
        sql = f"DELETE FROM {table}{_where(condition)}"
        return self._write(sql, tuple(params), table=table, operation="delete")

    def last_insert_id(self) -> Any:
        """Returns the id the database generated for the last inserted row."""
        return self.connector.lastrowid()

    def _write(self, sql: str, params: tuple, table: str, operation: str) -> int:
        self.connector.execute(sql, params)
        affected = self.connector.rowcount()
        if self.autocommit:
            self.connector.commit()
        log.info(f"{operation.capitalize()} executed.", table=table, rows=affected)
        return affected

# database/d1_connector.py
"""
Cloudflare D1 database connector implementation via the official Python SDK.

This module provides a concrete implementation of the `DatabaseConnector` for
Cloudflare's D1 serverless database. All interactions happen through the
`cloudflare` python package. D1 speaks the SQLite dialect, so the SQL that
`DataStore` generates runs unchanged against it.
"""

from typing import List, Tuple, Any, Dict

import structlog
from cloudflare import Cloudflare

from database.base_connector import DatabaseConnector
from config import mask_sensitive_data

log = structlog.get_logger(__name__)


class D1Connector(DatabaseConnector):
    """
    Manages operations for Cloudflare D1 using the official SDK.

    Each `execute` call is one authenticated `/query` request. D1 commits
    every request on its own, so `commit` and `rollback` are no-ops.
    """

    def __init__(self, config: Dict[str, str]):
        """
        Initializes the D1 connector using the Cloudflare SDK.

        Args:
            - config (Dict[str, str]): D1 credentials from `config.py`. Must
                                       contain 'd1_account_id', 'd1_database_id'
                                       and 'd1_api_token'.
        """
        self.config = config
        self.account_id = self.config["d1_account_id"]
        self.database_id = self.config["d1_database_id"]
        self.client = Cloudflare(api_token=self.config["d1_api_token"])
        self.last_results: List[Dict[str, Any]] = []
        self.last_changes = 0
        self.last_row_id: Any = None

    def connect(self):
        """
        Confirms the D1 connector is ready. Kept for interface compatibility.

        The Cloudflare client manages its own HTTP session, so no explicit
        setup is needed.
        """
        log.info(
            "Cloudflare D1 connector initialized.",
            config=mask_sensitive_data(self.config),
        )

    def close(self):
        """Logs closure. The Cloudflare client does not require explicit closing."""
        log.info("Cloudflare D1 connection closed.")

    def _query(self, sql: str, params: Tuple[Any, ...]):
        return self.client.d1.database.query(
            database_id=self.database_id,
            account_id=self.account_id,
            sql=sql,
            params=list(params),
        )

    def execute(self, sql: str, params: Tuple[Any, ...] = ()):
        """
        Executes a single SQL statement against the D1 `/query` endpoint.

        Rows come back as dictionaries. The result's `meta` block carries the
        affected-row count and the last inserted row id.
        """
        try:
            response = self._query(sql, params)
        except Exception as e:
            log.error("D1 API query failed", sql=sql, error=str(e))
            raise ConnectionError(f"D1 API Error: {e}") from e

        results = response.result
        first = results[0] if results else None
        self.last_results = list(getattr(first, "results", None) or [])
        meta = getattr(first, "meta", None)
        self.last_changes = int(getattr(meta, "changes", 0) or 0)
        self.last_row_id = getattr(meta, "last_row_id", None)

    def fetchall(self) -> List[Dict[str, Any]]:
        """Returns rows from the last `execute` call as a list of dictionaries."""
        return self.last_results

    def rowcount(self) -> int:
        return self.last_changes

    def lastrowid(self) -> Any:
        return self.last_row_id

    def commit(self):
        """No-op for D1, as each API request is auto-committed."""
        pass

    def rollback(self):
        """No-op for D1, as the API does not support multi-request transactions."""
        pass

# database/base_connector.py
"""
Defines the abstract base class for all database connectors.

A connector is the thin driver layer under `DataStore`: it executes SQL with
bound parameters and reports rows, affected-row counts and generated ids.
Any backend (SQLite, Cloudflare D1, ...) that fulfills this contract can sit
under the record layer without changes elsewhere.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple, Any, Dict


class DatabaseConnector(ABC):
    """
    Abstract Base Class that defines the interface for database connectors.

    Any class that inherits from DatabaseConnector MUST implement all methods
    decorated with `@abstractmethod`.
    """

    @abstractmethod
    def connect(self):
        """Establishes a connection to the database."""
        pass

    @abstractmethod
    def close(self):
        """Closes the database connection and releases any resources."""
        pass

    @abstractmethod
    def execute(self, sql: str, params: Tuple[Any, ...] = ()):
        """
        Executes a single SQL statement.

        Args:
            - sql (str): The SQL query to execute, using `?` placeholders.
            - params (Tuple[Any, ...]): Values bound to the placeholders.
        """
        pass

    @abstractmethod
    def fetchall(self) -> List[Dict[str, Any]]:
        """
        Fetches all rows from the result of the last executed SELECT query.

        Returns:
            - A list of rows, each a dictionary keyed by column name.
        """
        pass

    @abstractmethod
    def rowcount(self) -> int:
        """Returns the number of rows changed by the last executed statement."""
        pass

    @abstractmethod
    def lastrowid(self) -> Any:
        """Returns the id generated by the last executed INSERT statement."""
        pass

    @abstractmethod
    def commit(self):
        """
        Commits the current transaction to the database.

        For auto-committing APIs like D1, this method may be a no-op.
        """
        pass

    @abstractmethod
    def rollback(self):
        """
        Rolls back the current transaction, discarding any recent changes.

        For auto-committing APIs, this may be a no-op.
        """
        pass

"""
Shared pytest fixtures.

Provides:
- An in-memory SQLite data store with a `users` table
- A repository of `User` records bound to that store
- A persisted user to run update/delete scenarios against
"""

from typing import Generator

import pytest

from database.data_store import DataStore
from database.sqlite_connector import SQLiteConnector
from records.repository import Repository
from tests.models import USERS_SCHEMA, User


@pytest.fixture()
def connector() -> Generator[SQLiteConnector, None, None]:
    conn = SQLiteConnector(":memory:")
    conn.connect()
    conn.execute(USERS_SCHEMA)
    conn.commit()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def store(connector: SQLiteConnector) -> DataStore:
    return DataStore(connector)


@pytest.fixture()
def users(store: DataStore) -> Repository[User]:
    return Repository(User, store)


@pytest.fixture()
def saved_user(users: Repository[User]) -> User:
    """A persisted user with id 1."""
    user = users.new({"email": "a@x.com", "name": "A"})
    assert user.save() is True
    return user

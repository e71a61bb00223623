"""Record types used across the test suite."""

from records.record import Record

USERS_SCHEMA = """CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT,
    name TEXT
)"""


class User(Record):
    @classmethod
    def table_name(cls):
        return "users"

    @classmethod
    def primary_key(cls):
        return "id"

    @classmethod
    def attributes(cls):
        return ["id", "email", "name"]

    @classmethod
    def required_fields(cls):
        return ["email"]

    @classmethod
    def field_types(cls):
        return {"id": "int", "email": "email", "name": "str"}

    @classmethod
    def unique_fields(cls):
        return ["email"]

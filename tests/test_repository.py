from database.data_store import DataStore
from records.repository import Repository
from tests.models import User


class FlakyDeleteStore(DataStore):
    """Reports a failed delete (0 rows) on the given call numbers without touching the table."""

    def __init__(self, connector, failing_calls):
        super().__init__(connector)
        self.failing_calls = set(failing_calls)
        self.delete_calls = 0

    def delete(self, table, condition, params=()):
        self.delete_calls += 1
        if self.delete_calls in self.failing_calls:
            return 0
        return super().delete(table, condition, params)


def _seed(users, *rows):
    for email, name in rows:
        assert users.new({"email": email, "name": name}).save() is True


def test_new_binds_record_to_store(users, store):
    user = users.new({"email": "a@x.com"})
    assert isinstance(user, User)
    assert user.store is store
    assert user.is_new_record is True


def test_find_returns_first_match_as_existing_record(users):
    _seed(users, ("a@x.com", "A"), ("b@x.com", "A"))

    user = users.find("name = ?", ["A"])

    assert user.is_new_record is False
    assert user.to_dict() == {"id": 1, "email": "a@x.com", "name": "A"}


def test_find_returns_none_without_match(users):
    assert users.find("name = ?", ["nobody"]) is None


def test_find_all(users):
    _seed(users, ("a@x.com", "A"), ("b@x.com", "B"), ("c@x.com", "A"))

    found = users.find_all("name = ?", ["A"])

    assert [user.email for user in found] == ["a@x.com", "c@x.com"]
    assert all(not user.is_new_record for user in found)
    assert len(users.find_all()) == 3
    assert users.find_all("name = ?", ["Z"]) == []


def test_find_always_requeries(users, store):
    _seed(users, ("a@x.com", "A"))
    first = users.find_by_pk(1)
    store.update("users", {"name": "Changed"}, "id = ?", [1])

    assert users.find_by_pk(1).name == "Changed"
    assert first.name == "A"


def test_users_scenario(users):
    first = users.new({"email": "a@x.com", "name": "A"})
    assert first.save() is True
    assert first.id == 1

    second = users.new({"email": "a@x.com", "name": "B"})
    assert second.save() is False
    assert any("email" in message for message in second.errors)

    assert users.find_by_pk(1).to_dict() == {"id": 1, "email": "a@x.com", "name": "A"}


def test_saved_record_round_trips(users):
    user = users.new({"email": "round@x.com", "name": "Trip"})
    user.save()

    assert users.find_by_pk(user.id).to_dict() == user.to_dict()


def test_delete_by_pk(users):
    _seed(users, ("a@x.com", "A"))

    assert users.delete_by_pk(1) is True
    assert users.find_by_pk(1) is None
    assert users.delete_by_pk(1) is False


def test_delete_by_pk_on_missing_key_returns_false(users):
    assert users.delete_by_pk(42) is False


def test_delete_all_returns_number_deleted(users):
    _seed(users, ("a@x.com", "A"), ("b@x.com", "B"), ("c@x.com", "A"))

    assert users.delete_all("name = ?", ["A"]) == 2
    assert [user.email for user in users.find_all()] == ["b@x.com"]


def test_delete_all_is_not_atomic(connector, users):
    _seed(users, ("a@x.com", "A"), ("b@x.com", "A"))
    flaky = Repository(User, FlakyDeleteStore(connector, failing_calls=[2]))

    assert flaky.delete_all("name = ?", ["A"]) == 1

    assert users.find_by_pk(1) is None
    assert users.find_by_pk(2) is not None

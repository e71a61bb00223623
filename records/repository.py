# records/repository.py
"""Query and bulk-delete helpers for one record type."""

from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

import structlog

from database.data_store import DataStore, check_identifier
from records.record import Record

log = structlog.get_logger(__name__)

T = TypeVar("T", bound=Record)


class Repository(Generic[T]):
    """
    Finds and deletes rows of `record_class` through `store`.

    Every call queries the store again; nothing is cached.

    Args:
        record_class: The concrete `Record` subclass to materialize.
        store: The data store the records read from and write to.
    """

    def __init__(self, record_class: Type[T], store: DataStore):
        self._record_class = record_class
        self._store = store

    @property
    def record_class(self) -> Type[T]:
        return self._record_class

    def new(self, data: Optional[Mapping[str, Any]] = None) -> T:
        """Build an unsaved record bound to this repository's store."""
        return self._record_class(self._store, data)

    def _from_row(self, row: Mapping[str, Any]) -> T:
        record = self._record_class(self._store, row)
        record.is_new_record = False
        return record

    def find(self, condition: str = "", params: Sequence[Any] = ()) -> Optional[T]:
        """Return the first record matching `condition`, or None."""
        rows = self._store.select(self._record_class.table_name(), ["*"], condition, params)
        if not rows:
            return None
        return self._from_row(rows[0])

    def find_all(self, condition: str = "", params: Sequence[Any] = ()) -> List[T]:
        """Return every record matching `condition`."""
        rows = self._store.select(self._record_class.table_name(), ["*"], condition, params)
        return [self._from_row(row) for row in rows]

    def find_by_pk(self, pk: Any) -> Optional[T]:
        """Fetch a single record by primary key."""
        pk_name = check_identifier(self._record_class.primary_key())
        return self.find(f"{pk_name} = ?", [pk])

    def delete_all(self, condition: str = "", params: Sequence[Any] = ()) -> int:
        """
        Delete every record matching `condition`, one row at a time.

        Not atomic: a failed delete leaves that row in place and the loop
        carries on. Returns the number of rows actually deleted.
        """
        records = self.find_all(condition, params)
        deleted = sum(1 for record in records if record.delete())
        if deleted < len(records):
            log.warning(
                "Some rows could not be deleted.",
                table=self._record_class.table_name(),
                matched=len(records),
                deleted=deleted,
            )
        return deleted

    def delete_by_pk(self, pk: Any) -> bool:
        """Delete the record with primary key `pk`; False when it does not exist."""
        record = self.find_by_pk(pk)
        if record is None:
            return False
        return record.delete()

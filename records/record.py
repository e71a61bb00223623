# records/record.py
"""
Active-Record style base class.

A concrete record type describes its table through six classmethods
(`table_name`, `primary_key`, `attributes`, `required_fields`, `field_types`,
`unique_fields`). In return it gets validation, a save pipeline that chooses
between INSERT and UPDATE, a uniqueness check, and row deletion, all running
against the `DataStore` the instance was created with.

Save pipeline, one pass, no retries:

    validate -> before_save -> check_unique -> insert | update -> after_save

Known limitation: `check_unique` and the following write are two separate
round trips with no transaction around them. Two concurrent saves can both
pass the check and both write. Declare a UNIQUE constraint on the column when
that matters.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

import structlog

from database.data_store import DataStore, check_identifier
from validation.validator import Validator

log = structlog.get_logger(__name__)


class Record(ABC):
    """
    Base class for one table row plus its persistence operations.

    Declared attributes live as plain instance attributes, so `user.email`
    reads and writes the column value directly.
    """

    def __init__(self, store: DataStore, data: Optional[Mapping[str, Any]] = None):
        self._store = store
        self._is_new_record = True
        self._errors: List[str] = []
        for name in self.attributes():
            if name.startswith("_") or hasattr(Record, name):
                raise ValueError(
                    f"Attribute {name!r} of {type(self).__name__} clashes with a Record member"
                )
            setattr(self, name, None)
        if data:
            self.populate(data)

    def __repr__(self) -> str:
        values = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"{type(self).__name__}({values})"

    # --- Table metadata, supplied by subclasses ---

    @classmethod
    @abstractmethod
    def table_name(cls) -> str:
        """Name of the backing table."""

    @classmethod
    @abstractmethod
    def primary_key(cls) -> str:
        """Name of the single scalar primary key column."""

    @classmethod
    @abstractmethod
    def attributes(cls) -> List[str]:
        """Ordered column names this record exposes, primary key included."""

    @classmethod
    @abstractmethod
    def required_fields(cls) -> List[str]:
        pass

    @classmethod
    @abstractmethod
    def field_types(cls) -> Dict[str, str]:
        """Maps field names to `validation.validator.TYPE_CHECKS` tags."""

    @classmethod
    @abstractmethod
    def unique_fields(cls) -> List[str]:
        pass

    # --- State ---

    @property
    def store(self) -> DataStore:
        return self._store

    @property
    def is_new_record(self) -> bool:
        """True until the row is inserted, or when the record was not loaded from the table."""
        return self._is_new_record

    @is_new_record.setter
    def is_new_record(self, value: bool):
        self._is_new_record = bool(value)

    @property
    def errors(self) -> List[str]:
        """Messages from the most recent `validate` or `save` call."""
        return list(self._errors)

    @property
    def pk(self) -> Any:
        return getattr(self, self.primary_key())

    # --- Attribute helpers ---

    @staticmethod
    def _selection(attributes: Optional[Sequence[str]]) -> Optional[Set[str]]:
        if attributes is None:
            return None
        if isinstance(attributes, str):
            raise TypeError("attributes must be a sequence of names, not a single string")
        return set(attributes)

    def _attribute_list(self, attributes: Optional[Sequence[str]] = None) -> List[str]:
        names = list(self.attributes())
        selected = self._selection(attributes)
        if selected is not None:
            names = [name for name in names if name in selected]
        return names

    def populate(
        self, data: Mapping[str, Any], attributes: Optional[Sequence[str]] = None
    ) -> "Record":
        """
        Assigns values from `data` to declared attributes.

        Keys that are not declared attributes (or not in `attributes`, when
        given) are ignored. Returns the record so calls can be chained.
        """
        names = set(self._attribute_list(attributes))
        for key, value in data.items():
            if key in names:
                setattr(self, key, value)
        return self

    def to_dict(self, attributes: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Returns the current values of declared attributes, in declaration order."""
        return {name: getattr(self, name) for name in self._attribute_list(attributes)}

    # --- Lifecycle hooks ---

    def before_save(self) -> bool:
        """Runs after validation; returning False cancels the save."""
        return True

    def after_save(self) -> bool:
        """Runs after a successful insert or update. The return value is ignored."""
        return True

    # --- Validation ---

    def validate(self, attributes: Optional[Sequence[str]] = None) -> bool:
        """
        Checks required fields and field types over the (optionally filtered)
        attribute values.

        `errors` is reset first and holds the validator's messages when the
        check fails. With `attributes` given, only those values are handed to
        the validator while every required field is still demanded, so a
        filter that leaves out a required field fails validation.

        Returns:
            - bool: True when every check passes.
        """
        self._errors = []
        data = self.to_dict(attributes)
        types = {field: tag for field, tag in self.field_types().items() if field in data}

        validator = Validator()
        required_ok = validator.check_required(self.required_fields(), data)
        types_ok = validator.check_types(types, data)
        if required_ok and types_ok:
            return True

        self._errors.extend(validator.errors)
        log.info(
            "Record validation failed.",
            record=type(self).__name__,
            errors=self._errors,
        )
        return False

    def check_unique(self, attributes: Optional[Sequence[str]] = None) -> bool:
        """
        Checks that no other row shares a value on any unique field.

        All applicable unique fields are combined with OR, so a match on any
        single field blocks the save. An existing record excludes its own row
        by primary key. On conflict one message naming all checked fields is
        appended to `errors`.
        """
        declared = set(self.attributes())
        fields = [field for field in self.unique_fields() if field in declared]
        selected = self._selection(attributes)
        if selected:
            fields = [field for field in fields if field in selected]
        if not fields:
            return True

        condition = "(" + " OR ".join(f"{check_identifier(field)} = ?" for field in fields) + ")"
        params = [getattr(self, field) for field in fields]
        pk_name = check_identifier(self.primary_key())
        if not self._is_new_record:
            condition += f" AND {pk_name} != ?"
            params.append(self.pk)

        rows = self._store.select(self.table_name(), [pk_name], condition, params)
        if rows:
            message = f"One of these fields is not unique: {', '.join(fields)}"
            self._errors.append(message)
            log.warning(
                "Uniqueness check failed.",
                table=self.table_name(),
                fields=fields,
                conflicts=len(rows),
            )
            return False
        return True

    # --- Persistence ---

    def save(self, run_validation: bool = True, attributes: Optional[Sequence[str]] = None) -> bool:
        """
        Inserts or updates the row behind this record.

        Args:
            - run_validation (bool): Whether to call `validate` first.
            - attributes (Sequence[str] | None): Restricts validation, the
              uniqueness check and the written columns to these attributes.

        Returns:
            - bool: True when the row was written. False when validation, the
              `before_save` hook, the uniqueness check, or the write itself
              fails; `errors` explains the first two data problems.
        """
        self._errors = []
        if run_validation and not self.validate(attributes):
            return False
        if not self.before_save():
            log.info("Save cancelled by before_save hook.", record=type(self).__name__)
            return False
        if not self.check_unique(attributes):
            return False

        saved = self.insert(attributes) if self._is_new_record else self.update(attributes)
        if saved:
            self._is_new_record = False
            self.after_save()
        return saved

    def insert(self, attributes: Optional[Sequence[str]] = None) -> bool:
        """Inserts this record and stores the generated id in the primary key."""
        inserted = self._store.insert(self.table_name(), self.to_dict(attributes))
        if inserted > 0:
            setattr(self, self.primary_key(), self._store.last_insert_id())
        return inserted > 0

    def update(self, attributes: Optional[Sequence[str]] = None) -> bool:
        """Writes this record's values to the row matching its primary key."""
        updated = self._store.update(
            self.table_name(),
            self.to_dict(attributes),
            f"{check_identifier(self.primary_key())} = ?",
            [self.pk],
        )
        return updated > 0

    def delete(self) -> bool:
        """
        Deletes the row matching this record's primary key.

        The instance itself stays usable and keeps `is_new_record` as it was.
        """
        deleted = self._store.delete(
            self.table_name(),
            f"{check_identifier(self.primary_key())} = ?",
            [self.pk],
        )
        return deleted > 0

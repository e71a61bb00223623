# validation/validator.py
"""
Field-level checks used by `Record.validate`.

The validator knows nothing about tables: it receives a list of required
field names or a field-to-type-tag mapping together with the values to check,
answers True/False, and keeps a human-readable message for every failure.
"""

import re
from typing import Any, Callable, Dict, Iterable, List, Mapping

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_RE.match(value))


# Maps a type tag (as used in `Record.field_types()`) to its check.
TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "int": _is_int,
    "integer": _is_int,
    "float": _is_number,
    "number": _is_number,
    "str": lambda value: isinstance(value, str),
    "string": lambda value: isinstance(value, str),
    "bool": lambda value: isinstance(value, bool),
    "boolean": lambda value: isinstance(value, bool),
    "email": _is_email,
}


class Validator:
    """Collects error messages across `check_required` and `check_types` calls."""

    def __init__(self):
        self._errors: List[str] = []

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    def check_required(self, required_fields: Iterable[str], data: Mapping[str, Any]) -> bool:
        """
        Checks that every required field holds a value.

        A field is missing when it is absent from `data`, is None, or is a
        blank string.
        """
        valid = True
        for field in required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                self._errors.append(f"{field} is required.")
                valid = False
        return valid

    def check_types(self, field_types: Mapping[str, str], data: Mapping[str, Any]) -> bool:
        """
        Checks that the values present in `data` match their type tags.

        None values are skipped; presence is `check_required`'s job.

        Raises:
            - ValueError: If a type tag is not one of `TYPE_CHECKS`.
        """
        valid = True
        for field, tag in field_types.items():
            check = TYPE_CHECKS.get(tag)
            if check is None:
                raise ValueError(f"Unknown type tag {tag!r} for field {field!r}")
            value = data.get(field)
            if value is None:
                continue
            if not check(value):
                self._errors.append(f"{field} must be of type {tag}.")
                valid = False
        return valid

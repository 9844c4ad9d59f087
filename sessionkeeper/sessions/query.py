"""Filtering and sorting of session records."""

from operator import attrgetter
from typing import Any, Iterable, Mapping

from sessionkeeper.exceptions import UnknownFieldError
from sessionkeeper.sessions.models import RECORD_FIELDS, SessionRecord


def _check_field(field: str) -> None:
    if field not in RECORD_FIELDS:
        raise UnknownFieldError(field, RECORD_FIELDS)


def as_list(records: Mapping[str, SessionRecord]) -> list[SessionRecord]:
    """Records of a store/cache mapping, in the mapping's insertion order."""
    return list(records.values())


def filter_by(
    records: Iterable[SessionRecord], fields: Mapping[str, Any]
) -> list[SessionRecord]:
    """Keep records whose fields all equal the given values.

    Args:
        records: Records to filter
        fields: Field name to required value, e.g. ``{"cwd": "/home/me"}``

    Returns:
        Matching records in their original relative order

    Raises:
        UnknownFieldError: A field name is not a session record field
    """
    for field in fields:
        _check_field(field)

    return [
        record
        for record in records
        if all(getattr(record, field) == value for field, value in fields.items())
    ]


def sort_by(
    records: list[SessionRecord], field: str, descending: bool = False
) -> list[SessionRecord]:
    """Sort records in place by one field and return the same list.

    The sort is stable in both directions: records with equal keys keep
    their relative order, so for equal ``mtime`` the earlier record wins
    ``sort_by(..., "mtime", descending=True)[0]``.

    Raises:
        UnknownFieldError: ``field`` is not a session record field
    """
    _check_field(field)
    # list.sort(reverse=True) keeps equal elements in original order
    records.sort(key=attrgetter(field), reverse=descending)
    return records

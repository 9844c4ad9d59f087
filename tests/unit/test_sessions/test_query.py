"""Tests for session filtering and sorting."""

import pytest

from sessionkeeper.exceptions import UnknownFieldError
from sessionkeeper.sessions.models import SessionRecord
from sessionkeeper.sessions.query import as_list, filter_by, sort_by


def _record(name: str, cwd: str, mtime: float) -> SessionRecord:
    return SessionRecord(name=name, cwd=cwd, mtime=mtime, file_id=f"/s/{name}.json")


A = _record("a", "/p", 10)
B = _record("b", "/p", 20)
C = _record("c", "/q", 30)


class TestAsList:
    def test_preserves_mapping_order(self) -> None:
        mapping = {r.file_id: r for r in (C, A, B)}
        assert as_list(mapping) == [C, A, B]

    def test_returns_new_list(self) -> None:
        mapping = {A.file_id: A}
        records = as_list(mapping)
        records.append(B)
        assert list(mapping.values()) == [A]


class TestFilterBy:
    """Tests for filter_by()."""

    def test_filters_by_cwd(self) -> None:
        assert filter_by([A, C, B], {"cwd": "/p"}) == [A, B]

    def test_preserves_relative_order(self) -> None:
        assert filter_by([B, C, A], {"cwd": "/p"}) == [B, A]

    def test_all_fields_must_match(self) -> None:
        assert filter_by([A, B, C], {"cwd": "/p", "name": "b"}) == [B]

    def test_no_match_returns_empty(self) -> None:
        assert filter_by([A, B, C], {"cwd": "/z"}) == []

    def test_empty_input_is_noop(self) -> None:
        assert filter_by([], {"cwd": "/p"}) == []

    def test_empty_predicate_keeps_everything(self) -> None:
        assert filter_by([A, B], {}) == [A, B]

    def test_does_not_modify_input(self) -> None:
        records = [A, B, C]
        filter_by(records, {"cwd": "/q"})
        assert records == [A, B, C]

    def test_unknown_field_fails_fast(self) -> None:
        with pytest.raises(UnknownFieldError) as exc_info:
            filter_by([A], {"directory": "/p"})
        assert exc_info.value.field == "directory"

    def test_unknown_field_fails_even_on_empty_input(self) -> None:
        with pytest.raises(UnknownFieldError):
            filter_by([], {"bogus": 1})

    def test_unknown_field_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            filter_by([A], {"bogus": 1})


class TestSortBy:
    """Tests for sort_by()."""

    def test_sorts_in_place_and_returns_same_list(self) -> None:
        records = [C, A, B]
        result = sort_by(records, "mtime")
        assert result is records
        assert records == [A, B, C]

    def test_descending(self) -> None:
        assert sort_by([A, C, B], "mtime", descending=True) == [C, B, A]

    def test_sorts_strings_lexicographically(self) -> None:
        assert sort_by([C, A, B], "name") == [A, B, C]
        assert sort_by([A, C, B], "cwd") == [A, B, C]

    def test_ties_keep_original_order_descending(self) -> None:
        """Equal mtime: the earlier record stays first even when descending."""
        first = _record("first", "/p", 50)
        second = _record("second", "/p", 50)
        older = _record("older", "/p", 10)

        assert sort_by([first, older, second], "mtime", descending=True) == [
            first,
            second,
            older,
        ]
        assert sort_by([second, older, first], "mtime", descending=True) == [
            second,
            first,
            older,
        ]

    def test_ties_keep_original_order_ascending(self) -> None:
        x = _record("x", "/p", 5)
        y = _record("y", "/q", 5)
        assert sort_by([y, x], "mtime") == [y, x]

    @pytest.mark.parametrize("descending", [False, True])
    def test_idempotent(self, descending: bool) -> None:
        tied = _record("tied", "/p", 20)
        records = sort_by([C, tied, A, B], "mtime", descending)
        once = list(records)
        assert sort_by(records, "mtime", descending) == once

    def test_empty_list(self) -> None:
        assert sort_by([], "mtime", descending=True) == []

    def test_unknown_field_fails_fast(self) -> None:
        with pytest.raises(UnknownFieldError):
            sort_by([A, B], "size")

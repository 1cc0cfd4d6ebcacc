"""Unit tests for change detection (diff/engine.py).

Tests cover:
- Basic classification (added, removed, modified, unchanged)
- Partition, identity, and add/remove symmetry properties
- Bucket ordering
- Duplicate names (last declaration wins, warning logged)
- The greetUser sample scenario
"""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from docugen.diff.engine import detect_changes, find_duplicate_names
from docugen.diff.models import ChangeSet, FunctionRecord, ModifiedFunction

# ============================================================================
# Fixtures
# ============================================================================


def _fn(name: str, *params: str, kind: str = "FunctionDeclaration") -> FunctionRecord:
    return FunctionRecord(name=name, parameters=tuple(params), kind=kind)


def _names(records: tuple[FunctionRecord, ...] | tuple[ModifiedFunction, ...]) -> list[str]:
    return [r.name for r in records]


BEFORE = [
    _fn("greetUser", "name"),
    _fn("getUser", "id"),
    _fn("calculateTotal", "items"),
    _fn("formatDate", "date", kind="ArrowFunctionExpression"),
    _fn("validateEmail", "email"),
]

AFTER = [
    _fn("greetUser", "name", "greeting"),
    _fn("calculateTotal", "items"),
    _fn("formatDate", "date", "locale", kind="ArrowFunctionExpression"),
    _fn("validateEmail", "email"),
    _fn("loginUser", "email", "password"),
    _fn("logoutUser", kind="ArrowFunctionExpression"),
]

PAIRS = [
    ([], []),
    ([_fn("a")], []),
    ([], [_fn("a", "x")]),
    ([_fn("a", "x"), _fn("b")], [_fn("b", "y"), _fn("c")]),
    (BEFORE, AFTER),
]


# ============================================================================
# Tests: Classification
# ============================================================================


class TestClassification:
    """Tests for detect_changes bucket assignment."""

    def test_added_function(self) -> None:
        changes = detect_changes([], [_fn("foo", "a")])
        assert changes.added == (_fn("foo", "a"),)
        assert changes.removed == ()
        assert changes.modified == ()

    def test_removed_function(self) -> None:
        changes = detect_changes([_fn("foo", "a")], [])
        assert changes.removed == (_fn("foo", "a"),)
        assert changes.added == ()

    def test_modified_function_carries_old_and_new_parameters(self) -> None:
        changes = detect_changes([_fn("foo", "a")], [_fn("foo", "a", "b")])
        assert changes.modified == (
            ModifiedFunction(name="foo", old_parameters=("a",), new_parameters=("a", "b")),
        )

    def test_reordered_parameters_are_modified(self) -> None:
        changes = detect_changes([_fn("foo", "a", "b")], [_fn("foo", "b", "a")])
        assert _names(changes.modified) == ["foo"]

    def test_default_value_change_is_modified(self) -> None:
        changes = detect_changes([_fn("foo", "a=1")], [_fn("foo", "a=2")])
        assert _names(changes.modified) == ["foo"]

    def test_unchanged_function_in_no_bucket(self) -> None:
        changes = detect_changes([_fn("foo", "a")], [_fn("foo", "a")])
        assert changes == ChangeSet()
        assert changes.is_empty

    def test_kind_is_ignored(self) -> None:
        before = [_fn("foo", "a", kind="FunctionDeclaration")]
        after = [_fn("foo", "a", kind="ArrowFunctionExpression")]
        assert detect_changes(before, after).is_empty

    def test_accepts_generators(self) -> None:
        changes = detect_changes((f for f in [_fn("a")]), (f for f in [_fn("b")]))
        assert _names(changes.added) == ["b"]
        assert _names(changes.removed) == ["a"]


# ============================================================================
# Tests: Properties
# ============================================================================


class TestProperties:
    """Partition, identity, and symmetry."""

    @pytest.mark.parametrize(("before", "after"), PAIRS)
    def test_every_name_in_at_most_one_bucket(
        self, before: list[FunctionRecord], after: list[FunctionRecord]
    ) -> None:
        changes = detect_changes(before, after)
        buckets = [
            set(_names(changes.added)),
            set(_names(changes.removed)),
            set(_names(changes.modified)),
        ]
        assert not buckets[0] & buckets[1]
        assert not buckets[0] & buckets[2]
        assert not buckets[1] & buckets[2]

        all_names = {f.name for f in before} | {f.name for f in after}
        unchanged = {
            f.name
            for f in after
            if any(b.name == f.name and b.parameters == f.parameters for b in before)
        }
        assert buckets[0] | buckets[1] | buckets[2] | unchanged == all_names

    @pytest.mark.parametrize("records", [[], [_fn("a")], BEFORE, AFTER])
    def test_identity(self, records: list[FunctionRecord]) -> None:
        assert detect_changes(records, records) == ChangeSet()

    @pytest.mark.parametrize(("before", "after"), PAIRS)
    def test_added_and_removed_swap_when_reversed(
        self, before: list[FunctionRecord], after: list[FunctionRecord]
    ) -> None:
        forward = detect_changes(before, after)
        backward = detect_changes(after, before)
        assert set(forward.added) == set(backward.removed)
        assert set(forward.removed) == set(backward.added)


# ============================================================================
# Tests: Ordering
# ============================================================================


class TestOrdering:
    """Buckets follow the order names are first seen."""

    def test_added_follows_after_order(self) -> None:
        changes = detect_changes([], [_fn("z"), _fn("a"), _fn("m")])
        assert _names(changes.added) == ["z", "a", "m"]

    def test_removed_follows_before_order(self) -> None:
        changes = detect_changes([_fn("z"), _fn("a"), _fn("m")], [])
        assert _names(changes.removed) == ["z", "a", "m"]

    def test_modified_follows_after_order(self) -> None:
        before = [_fn("a", "x"), _fn("b", "x")]
        after = [_fn("b", "y"), _fn("a", "y")]
        assert _names(detect_changes(before, after).modified) == ["b", "a"]


# ============================================================================
# Tests: Duplicate Names
# ============================================================================


class TestDuplicateNames:
    """A repeated name keeps its first position but the last declaration."""

    def test_last_declaration_wins(self) -> None:
        before = [_fn("foo", "a"), _fn("foo", "a", "b")]
        after = [_fn("foo", "a", "b")]
        assert detect_changes(before, after).is_empty

    def test_duplicate_keeps_first_position(self) -> None:
        after = [_fn("a"), _fn("b"), _fn("a", "x")]
        changes = detect_changes([], after)
        assert changes.added == (_fn("a", "x"), _fn("b"))

    def test_duplicates_logged(self) -> None:
        with capture_logs() as logs:
            detect_changes([_fn("foo"), _fn("foo")], [])
        warnings = [e for e in logs if e["event"] == "duplicate_function_names"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["side"] == "before"
        assert warnings[0]["names"] == ["foo"]

    def test_no_log_without_duplicates(self) -> None:
        with capture_logs() as logs:
            detect_changes([_fn("foo")], [_fn("bar")])
        assert not [e for e in logs if e["event"] == "duplicate_function_names"]

    def test_find_duplicate_names(self) -> None:
        records = [_fn("b"), _fn("a"), _fn("b"), _fn("c"), _fn("a"), _fn("b")]
        assert find_duplicate_names(records) == ["b", "a"]

    def test_find_duplicate_names_empty(self) -> None:
        assert find_duplicate_names([_fn("a"), _fn("b")]) == []


# ============================================================================
# Tests: Sample Scenario
# ============================================================================


class TestSampleScenario:
    """The old.js / new.js sample pair."""

    def test_buckets(self) -> None:
        changes = detect_changes(BEFORE, AFTER)

        assert _names(changes.added) == ["loginUser", "logoutUser"]
        assert _names(changes.removed) == ["getUser"]
        assert changes.modified == (
            ModifiedFunction("greetUser", ("name",), ("name", "greeting")),
            ModifiedFunction("formatDate", ("date",), ("date", "locale")),
        )

    def test_counts(self) -> None:
        changes = detect_changes(BEFORE, AFTER)
        assert changes.counts() == {"added": 2, "removed": 1, "modified": 2}

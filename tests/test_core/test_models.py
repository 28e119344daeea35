"""Tests for sdiff.core.models."""

from __future__ import annotations

import dataclasses

import pytest

from sdiff.core.models import (
    ArrayStrategy,
    Change,
    ChangeSet,
    ChangeType,
    DiffConfig,
    DiffStats,
)
from sdiff.core.paths import ValuePath
from sdiff.core.value import Number, String


class TestEnums:
    """Verify enum values used on the command line and in JSON output."""

    def test_change_type_values(self) -> None:
        assert [t.value for t in ChangeType] == ["added", "removed", "modified", "unchanged"]

    def test_array_strategy_values(self) -> None:
        assert ArrayStrategy("lcs") is ArrayStrategy.lcs
        assert ArrayStrategy.positional == "positional"


class TestDiffConfig:
    """Verify defaults and immutability."""

    def test_defaults(self) -> None:
        config = DiffConfig()
        assert config.compact is True
        assert config.null_as_missing is False
        assert config.ignore_whitespace is False
        assert config.array_strategy == ArrayStrategy.positional

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DiffConfig().compact = False  # type: ignore[misc]


class TestChange:
    """Verify change constructors and the value accessor."""

    def test_added_has_only_new_value(self) -> None:
        change = Change.added(ValuePath.of("a"), Number(1))
        assert change.change_type == ChangeType.added
        assert change.old_value is None
        assert change.value == Number(1)

    def test_removed_value_is_old_side(self) -> None:
        change = Change.removed(ValuePath.of("a"), String("x"))
        assert change.new_value is None
        assert change.value == String("x")

    def test_modified_value_is_new_side(self) -> None:
        change = Change.modified(ValuePath.of("a"), Number(1), Number(2))
        assert change.value == Number(2)

    def test_unchanged_carries_both_sides(self) -> None:
        change = Change.unchanged(ValuePath.of("a"), Number(1), Number(1.0))
        assert change.old_value == change.new_value


class TestDiffStats:
    """Verify counting."""

    def test_from_changes(self) -> None:
        path = ValuePath.of("x")
        changes = [
            Change.added(path, Number(1)),
            Change.added(path, Number(2)),
            Change.removed(path, Number(3)),
            Change.unchanged(path, Number(4), Number(4)),
        ]
        stats = DiffStats.from_changes(changes)
        assert stats == DiffStats(added=2, removed=1, modified=0, unchanged=1)
        assert stats.total_changes == 3


class TestChangeSet:
    """Verify emptiness and container behavior."""

    def test_default_is_empty(self) -> None:
        assert ChangeSet().is_empty()
        assert len(ChangeSet()) == 0

    def test_only_unchanged_counts_as_empty(self) -> None:
        path = ValuePath.of("a")
        change_set = ChangeSet.from_changes([Change.unchanged(path, Number(1), Number(1))])
        assert change_set.is_empty()
        assert len(change_set) == 1

    def test_from_changes_keeps_order(self) -> None:
        first = Change.added(ValuePath.of("b"), Number(1))
        second = Change.removed(ValuePath.of("a"), Number(2))
        change_set = ChangeSet.from_changes([first, second])
        assert list(change_set) == [first, second]
        assert not change_set.is_empty()

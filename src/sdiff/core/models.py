"""Data models for semantic diff results and configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from sdiff.core.paths import ValuePath
    from sdiff.core.value import Value


class ChangeType(StrEnum):
    """Kind of a single reported difference."""

    added = "added"
    removed = "removed"
    modified = "modified"
    unchanged = "unchanged"


class ArrayStrategy(StrEnum):
    """How two arrays are aligned before their elements are compared."""

    positional = "positional"
    lcs = "lcs"


@dataclass(frozen=True)
class DiffConfig:
    """Immutable configuration for one comparison.

    Attributes:
        compact: Suppress ``unchanged`` entries.
        null_as_missing: Treat an object key holding null as absent.
        ignore_whitespace: Collapse and trim whitespace before comparing strings.
        array_strategy: Alignment strategy for arrays.
    """

    compact: bool = True
    null_as_missing: bool = False
    ignore_whitespace: bool = False
    array_strategy: ArrayStrategy = ArrayStrategy.positional


@dataclass(frozen=True)
class Change:
    """One difference at a path.

    ``old_value`` is None for added entries and ``new_value`` is None for
    removed ones. Unchanged entries carry both sides.
    """

    path: ValuePath
    change_type: ChangeType
    old_value: Value | None = None
    new_value: Value | None = None

    @classmethod
    def added(cls, path: ValuePath, new_value: Value) -> Change:
        return cls(path, ChangeType.added, new_value=new_value)

    @classmethod
    def removed(cls, path: ValuePath, old_value: Value) -> Change:
        return cls(path, ChangeType.removed, old_value=old_value)

    @classmethod
    def modified(cls, path: ValuePath, old_value: Value, new_value: Value) -> Change:
        return cls(path, ChangeType.modified, old_value=old_value, new_value=new_value)

    @classmethod
    def unchanged(cls, path: ValuePath, old_value: Value, new_value: Value) -> Change:
        return cls(path, ChangeType.unchanged, old_value=old_value, new_value=new_value)

    @property
    def value(self) -> Value | None:
        """The new-side value when present, otherwise the old-side value."""
        return self.new_value if self.new_value is not None else self.old_value


@dataclass(frozen=True)
class DiffStats:
    """Aggregate counts for a change set."""

    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @classmethod
    def from_changes(cls, changes: Sequence[Change]) -> DiffStats:
        """Compute stats by counting change types."""
        return cls(
            added=sum(1 for c in changes if c.change_type == ChangeType.added),
            removed=sum(1 for c in changes if c.change_type == ChangeType.removed),
            modified=sum(1 for c in changes if c.change_type == ChangeType.modified),
            unchanged=sum(1 for c in changes if c.change_type == ChangeType.unchanged),
        )

    @property
    def total_changes(self) -> int:
        """Number of added, removed and modified entries."""
        return self.added + self.removed + self.modified


@dataclass(frozen=True)
class ChangeSet:
    """Ordered changes from one diff run plus their aggregate counts."""

    changes: tuple[Change, ...] = ()
    stats: DiffStats = DiffStats()

    @classmethod
    def from_changes(cls, changes: Sequence[Change]) -> ChangeSet:
        """Build a change set, computing stats from the changes."""
        changes = tuple(changes)
        return cls(changes=changes, stats=DiffStats.from_changes(changes))

    def is_empty(self) -> bool:
        """Return True when no added, removed or modified entries exist."""
        return self.stats.total_changes == 0

    def __len__(self) -> int:
        return len(self.changes)

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

"""Recursive structural comparison of two value trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from sdiff.core.align import align
from sdiff.core.models import Change, ChangeSet, DiffConfig
from sdiff.core.paths import ValuePath
from sdiff.core.value import Array, Object, semantic_equals

if TYPE_CHECKING:
    from sdiff.core.value import Value

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Task:
    """A pending comparison; a missing side means added or removed."""

    path: ValuePath
    old: Value | None
    new: Value | None


class StructuralComparator:
    """Compares two value trees and produces an ordered change set.

    Dispatch by value kind:
    - different kinds -> modified at the current path
    - two scalars -> unchanged if equal, else modified
    - two objects -> per key of the union (old-side order, then new-only keys)
    - two arrays -> per step of the configured alignment

    Containers are always decomposed into child changes; an object or array
    is never reported as a single opaque modification. The walk is a
    pre-order traversal driven by an explicit stack, so output order is
    deterministic and deep trees do not exhaust the interpreter stack.
    """

    def __init__(self, config: DiffConfig | None = None) -> None:
        """Initialize with an optional configuration.

        Args:
            config: Comparison options. Defaults to DiffConfig() if None.
        """
        self._config = config or DiffConfig()
        self._equals = partial(
            semantic_equals,
            ignore_whitespace=self._config.ignore_whitespace,
            null_as_missing=self._config.null_as_missing,
        )

    @property
    def config(self) -> DiffConfig:
        return self._config

    def compare(self, old: Value, new: Value) -> ChangeSet:
        """Compare two value trees.

        Args:
            old: Old-side root.
            new: New-side root.

        Returns:
            ChangeSet with changes in pre-order and aggregate stats.
        """
        changes: list[Change] = []
        stack = [_Task(ValuePath(), old, new)]

        while stack:
            task = stack.pop()
            if task.old is None and task.new is not None:
                changes.append(Change.added(task.path, task.new))
            elif task.new is None and task.old is not None:
                changes.append(Change.removed(task.path, task.old))
            elif task.old is not None and task.new is not None:
                children = self._compare_pair(task.path, task.old, task.new, changes)
                stack.extend(reversed(children))

        change_set = ChangeSet.from_changes(changes)
        _log.debug(
            "Diff produced %d added, %d removed, %d modified, %d unchanged",
            change_set.stats.added,
            change_set.stats.removed,
            change_set.stats.modified,
            change_set.stats.unchanged,
        )
        return change_set

    def _compare_pair(
        self,
        path: ValuePath,
        old: Value,
        new: Value,
        changes: list[Change],
    ) -> list[_Task]:
        """Compare one pair, recording leaf changes and returning child tasks."""
        if type(old) is not type(new):
            changes.append(Change.modified(path, old, new))
            return []

        if isinstance(old, Object) and isinstance(new, Object):
            return self._object_tasks(path, old, new)

        if isinstance(old, Array) and isinstance(new, Array):
            return self._array_tasks(path, old, new)

        if self._equals(old, new):
            if not self._config.compact:
                changes.append(Change.unchanged(path, old, new))
        else:
            changes.append(Change.modified(path, old, new))
        return []

    def _object_tasks(self, path: ValuePath, old: Object, new: Object) -> list[_Task]:
        """Walk the key union: old-side order first, then new-only keys.

        With null_as_missing, entries holding null count as absent on
        their side before presence is compared.
        """
        skip_null = self._config.null_as_missing
        old_entries = dict(old.items(skip_null=skip_null))
        new_entries = dict(new.items(skip_null=skip_null))

        tasks = [
            _Task(path.child(key), old_value, new_entries.get(key))
            for key, old_value in old_entries.items()
        ]
        tasks.extend(
            _Task(path.child(key), None, new_value)
            for key, new_value in new_entries.items()
            if key not in old_entries
        )
        return tasks

    def _array_tasks(self, path: ValuePath, old: Array, new: Array) -> list[_Task]:
        """Walk the alignment of two arrays.

        Matched and added elements are addressed by their new-side index,
        removed elements by their old-side index.
        """
        alignment = align(old.items, new.items, self._config.array_strategy, self._equals)

        tasks: list[_Task] = []
        for pair in alignment:
            if pair.is_addition:
                tasks.append(_Task(path.child(pair.new_index), None, new[pair.new_index]))
            elif pair.is_removal:
                tasks.append(_Task(path.child(pair.old_index), old[pair.old_index], None))
            else:
                tasks.append(
                    _Task(path.child(pair.new_index), old[pair.old_index], new[pair.new_index])
                )
        return tasks


def compute_diff(old: Value, new: Value, config: DiffConfig | None = None) -> ChangeSet:
    """Compute the semantic difference between two value trees.

    Total for well-formed trees: never raises.

    Args:
        old: Old-side root.
        new: New-side root.
        config: Comparison options. Defaults to DiffConfig() if None.

    Returns:
        The ordered ChangeSet.
    """
    return StructuralComparator(config).compare(old, new)

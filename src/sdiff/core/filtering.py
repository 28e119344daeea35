"""Change filtering: glob-style path patterns.

Pattern syntax (dot-separated segments):

- ``name``: matches exactly the key ``name``, or the index whose decimal
  form is ``name`` (``items.0``)
- ``*``: matches exactly one segment
- ``**``: matches zero or more segments; a trailing ``**`` after other
  segments must match at least one (``spec.**`` selects everything under
  ``spec`` but not ``spec`` itself), and a lone ``**`` matches every path

Patterns are anchored at both ends. A change passes a filter when no
``only`` patterns are configured or one of them matches, and none of the
``ignore`` patterns match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sdiff.core.models import ChangeSet
from sdiff.core.paths import ValuePath
from sdiff.errors import SdiffError

if TYPE_CHECKING:
    from collections.abc import Sequence

_log = logging.getLogger(__name__)

SEPARATOR = "."
SINGLE_WILDCARD = "*"
DOUBLE_WILDCARD = "**"


class PatternError(SdiffError, ValueError):
    """Raised when a path pattern is malformed."""


@dataclass(frozen=True)
class PathPattern:
    """A compiled path pattern."""

    source: str
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, pattern: str) -> PathPattern:
        """Compile a dot-separated pattern.

        Raises:
            PatternError: If the pattern is empty or has an empty segment.
        """
        if not pattern:
            msg = "Path pattern must not be empty"
            raise PatternError(msg)
        segments = tuple(pattern.split(SEPARATOR))
        if any(not segment for segment in segments):
            msg = f"Path pattern has an empty segment: {pattern!r}"
            raise PatternError(msg)
        return cls(source=pattern, segments=segments)

    def matches(self, path: ValuePath | Sequence[str]) -> bool:
        """Return True if the pattern consumes the entire path.

        Matching tracks the set of reachable path positions segment by
        segment, which explores every ``**`` split without backtracking
        blowup.
        """
        parts = path.parts() if isinstance(path, ValuePath) else tuple(path)
        last = len(self.segments) - 1
        positions = {0}

        for index, segment in enumerate(self.segments):
            if segment == DOUBLE_WILDCARD:
                start = min(positions)
                if index == last and index > 0:
                    start += 1
                positions = set(range(start, len(parts) + 1))
            else:
                positions = {
                    pos + 1
                    for pos in positions
                    if pos < len(parts) and segment in (SINGLE_WILDCARD, parts[pos])
                }
            if not positions:
                return False

        return len(parts) in positions

    def __str__(self) -> str:
        return self.source


def _compile(patterns: Sequence[str]) -> tuple[PathPattern, ...]:
    return tuple(PathPattern.parse(p) for p in patterns)


@dataclass(frozen=True)
class FilterConfig:
    """Immutable configuration for change filtering.

    Patterns are compiled on construction, so malformed syntax is rejected
    here rather than in the middle of filtering.

    Raises:
        PatternError: If any pattern is malformed.
    """

    ignore_patterns: tuple[str, ...] = ()
    only_patterns: tuple[str, ...] = ()
    _ignore: tuple[PathPattern, ...] = field(init=False, repr=False, compare=False)
    _only: tuple[PathPattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))
        object.__setattr__(self, "only_patterns", tuple(self.only_patterns))
        object.__setattr__(self, "_ignore", _compile(self.ignore_patterns))
        object.__setattr__(self, "_only", _compile(self.only_patterns))

    @property
    def has_filters(self) -> bool:
        return bool(self.ignore_patterns or self.only_patterns)

    @property
    def ignore(self) -> tuple[PathPattern, ...]:
        return self._ignore

    @property
    def only(self) -> tuple[PathPattern, ...]:
        return self._only


class ChangeFilter:
    """Selects changes from a change set by path.

    Filtering is pure: the input change set is never modified and the
    result can be filtered again with the same outcome.
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        """Initialize the filter with the given configuration."""
        self._config = config or FilterConfig()

    def includes(self, path: ValuePath) -> bool:
        """Return True if a change at *path* passes the filter."""
        if self._config.only and not any(p.matches(path) for p in self._config.only):
            return False
        return not any(p.matches(path) for p in self._config.ignore)

    def apply(self, change_set: ChangeSet) -> ChangeSet:
        """Return the subset of changes that pass, with recomputed stats."""
        if not self._config.has_filters:
            return change_set
        kept = [change for change in change_set.changes if self.includes(change.path)]
        _log.debug("Path filter kept %d of %d changes", len(kept), len(change_set.changes))
        return ChangeSet.from_changes(kept)


def filter_changes(change_set: ChangeSet, config: FilterConfig) -> ChangeSet:
    """Apply *config* to *change_set*; see :class:`ChangeFilter`."""
    return ChangeFilter(config).apply(change_set)

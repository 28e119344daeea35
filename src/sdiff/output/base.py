"""Renderer protocol and shared rendering options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sdiff.core.models import ChangeSet, DiffStats


class OutputFormat(StrEnum):
    """Output format for rendering a change set."""

    terminal = "terminal"
    plain = "plain"
    json = "json"


@dataclass(frozen=True)
class OutputOptions:
    """Immutable options for human-readable renderers.

    Attributes:
        show_values: Print full values (as compact JSON) instead of previews.
        max_value_length: Maximum preview length before truncation.
        quiet: Suppress the summary line.
    """

    show_values: bool = False
    max_value_length: int = 80
    quiet: bool = False


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering change sets.

    Implementations write to their own destination (console, stream).
    """

    def render(self, change_set: ChangeSet) -> None:
        """Render every change followed by a summary."""
        ...

    def render_stats(self, stats: DiffStats) -> None:
        """Render summary statistics only."""
        ...

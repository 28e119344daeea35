"""Rich console renderer (default output mode)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from sdiff.core.models import ChangeType
from sdiff.output._format import NO_CHANGES, change_parts, format_summary
from sdiff.output.base import OutputOptions

if TYPE_CHECKING:
    from sdiff.core.models import Change, ChangeSet, DiffStats

_CHANGE_STYLES: dict[ChangeType, tuple[str, str]] = {
    ChangeType.added: ("bold green", "green"),
    ChangeType.removed: ("bold red", "red"),
    ChangeType.modified: ("bold yellow", "yellow"),
    ChangeType.unchanged: ("dim", "dim"),
}


class RichRenderer:
    """Renders a change set as colored lines on a Rich console.

    Change indicators:
    - Added: green with '+' prefix
    - Removed: red with '-' prefix
    - Modified: yellow with '~' prefix and 'old → new'
    - Unchanged: dim, no prefix

    Lines are built as ``Text`` objects so that brackets inside values are
    never interpreted as console markup.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        options: OutputOptions | None = None,
    ) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
            options: Display options. Defaults to OutputOptions() if None.
        """
        self._console = console or Console()
        self._options = options or OutputOptions()

    def render(self, change_set: ChangeSet) -> None:
        """Render each change on its own line, then the summary."""
        if not change_set.changes:
            self._console.print(Text(NO_CHANGES, style="dim"))
            return

        for change in change_set.changes:
            self._console.print(self._change_line(change))

        if not self._options.quiet:
            self._console.print()
            self.render_stats(change_set.stats)

    def render_stats(self, stats: DiffStats) -> None:
        """Render the summary line."""
        self._console.print(Text(format_summary(stats), style="bold"))

    def _change_line(self, change: Change) -> Text:
        """Build a styled line for one change."""
        prefix, path, value = change_parts(change, self._options)
        prefix_style, body_style = _CHANGE_STYLES[change.change_type]
        line = Text()
        line.append(prefix, style=prefix_style)
        line.append(" ")
        line.append(path, style=body_style)
        line.append(": ", style=body_style)
        line.append(value, style=body_style)
        return line

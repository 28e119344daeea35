"""Plain-text renderer (no colors)."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from sdiff.output._format import NO_CHANGES, format_change, format_summary
from sdiff.output.base import OutputOptions

if TYPE_CHECKING:
    from typing import TextIO

    from sdiff.core.models import ChangeSet, DiffStats


class PlainRenderer:
    """Renders a change set as uncolored lines to a text stream.

    Uses the same layout as the terminal renderer, which makes it suitable
    for pipes, logs and files.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        options: OutputOptions | None = None,
    ) -> None:
        self._output = output or sys.stdout
        self._options = options or OutputOptions()

    def render(self, change_set: ChangeSet) -> None:
        """Write each change on its own line, then the summary."""
        if not change_set.changes:
            self._output.write(f"{NO_CHANGES}\n")
            return

        for change in change_set.changes:
            self._output.write(format_change(change, self._options) + "\n")

        if not self._options.quiet:
            self._output.write("\n")
            self.render_stats(change_set.stats)

    def render_stats(self, stats: DiffStats) -> None:
        """Write the summary line."""
        self._output.write(format_summary(stats) + "\n")

"""JSON export renderer."""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING, Any

from sdiff.core.value import to_python

if TYPE_CHECKING:
    from typing import TextIO

    from sdiff.core.models import Change, ChangeSet, DiffStats


def change_to_dict(change: Change) -> dict[str, Any]:
    """Convert a change to a JSON-ready dict.

    Path segments keep their type: keys are strings, indices are integers.
    A missing side is null.
    """
    return {
        "path": list(change.path.segments),
        "type": change.change_type.value,
        "old_value": None if change.old_value is None else to_python(change.old_value),
        "new_value": None if change.new_value is None else to_python(change.new_value),
    }


class JsonRenderer:
    """Renders change sets as JSON to a text stream.

    Output modes:
    - render(): ``{"changes": [...], "stats": {...}}``
    - render_stats(): stats object only

    Values are always emitted in full; truncation is a display concern of
    the human-readable renderers. Output goes to stdout by default. Pass a
    custom TextIO for file output or testing.
    """

    def __init__(self, output: TextIO | None = None, *, indent: int = 2) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for JSON output. Defaults to sys.stdout.
            indent: JSON indentation level. Defaults to 2.
        """
        self._output = output or sys.stdout
        self._indent = indent

    def render(self, change_set: ChangeSet) -> None:
        """Serialize every change plus stats as JSON."""
        data = {
            "changes": [change_to_dict(c) for c in change_set.changes],
            "stats": dataclasses.asdict(change_set.stats),
        }
        json.dump(data, self._output, indent=self._indent, ensure_ascii=False)
        self._output.write("\n")

    def render_stats(self, stats: DiffStats) -> None:
        """Serialize summary statistics as JSON."""
        json.dump(dataclasses.asdict(stats), self._output, indent=self._indent)
        self._output.write("\n")

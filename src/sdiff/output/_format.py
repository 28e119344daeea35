"""Text formatting shared by the terminal and plain renderers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sdiff.core.models import ChangeType
from sdiff.core.value import Array, Bool, Null, Number, Object, String, to_python

if TYPE_CHECKING:
    from sdiff.core.models import Change, DiffStats
    from sdiff.core.value import Value
    from sdiff.output.base import OutputOptions

NO_CHANGES = "No changes detected."
ELLIPSIS = "..."
ARROW = "→"

CHANGE_PREFIXES: dict[ChangeType, str] = {
    ChangeType.added: "+",
    ChangeType.removed: "-",
    ChangeType.modified: "~",
    ChangeType.unchanged: " ",
}


def _count(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def preview(value: Value, max_length: int) -> str:
    """Return a short, single-line preview of a value.

    Containers are summarised by size; anything longer than *max_length*
    is cut and ends with ``...``.
    """
    if isinstance(value, Null):
        text = "null"
    elif isinstance(value, Bool):
        text = "true" if value.value else "false"
    elif isinstance(value, Number):
        text = str(int(value.value)) if value.is_integral() else str(value.value)
    elif isinstance(value, String):
        text = f'"{value.value}"'
    elif isinstance(value, Object):
        text = f"{{ {_count(len(value), 'key', 'keys')} }}" if len(value) else "{}"
    elif isinstance(value, Array):
        text = f"[ {_count(len(value), 'item', 'items')} ]" if len(value) else "[]"
    else:
        text = repr(value)

    if len(text) > max_length:
        return text[: max(max_length - len(ELLIPSIS), 0)] + ELLIPSIS
    return text


def format_value(value: Value | None, options: OutputOptions) -> str:
    """Format one side of a change according to the output options."""
    if value is None:
        return ""
    if options.show_values:
        return json.dumps(to_python(value), ensure_ascii=False)
    return preview(value, options.max_value_length)


def change_parts(change: Change, options: OutputOptions) -> tuple[str, str, str]:
    """Split a change into (prefix, path, value text) for display."""
    prefix = CHANGE_PREFIXES[change.change_type]
    path = str(change.path)
    if change.change_type == ChangeType.modified:
        old = format_value(change.old_value, options)
        new = format_value(change.new_value, options)
        return prefix, path, f"{old} {ARROW} {new}"
    if change.change_type == ChangeType.removed:
        return prefix, path, format_value(change.old_value, options)
    return prefix, path, format_value(change.value, options)


def format_change(change: Change, options: OutputOptions) -> str:
    """Format a change as a single plain-text line."""
    prefix, path, text = change_parts(change, options)
    return f"{prefix} {path}: {text}"


def format_summary(stats: DiffStats) -> str:
    """Return ``Summary: 1 added, 2 modified`` or ``Summary: No changes``."""
    if stats.total_changes == 0:
        return "Summary: No changes"
    parts = [
        f"{count} {label}"
        for count, label in (
            (stats.added, "added"),
            (stats.removed, "removed"),
            (stats.modified, "modified"),
            (stats.unchanged, "unchanged"),
        )
        if count
    ]
    return f"Summary: {', '.join(parts)}"

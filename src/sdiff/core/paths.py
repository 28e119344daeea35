"""Path addressing inside a value tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

Segment = str | int


@dataclass(frozen=True)
class ValuePath:
    """Immutable sequence of object keys (str) and array indices (int).

    The empty path addresses the document root. Two paths are equal when
    they have the same length and pairwise-equal segments; the key ``"0"``
    and the index ``0`` are different segments.
    """

    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        for segment in self.segments:
            if isinstance(segment, bool) or not isinstance(segment, (str, int)):
                msg = f"Path segments must be str or int, got {type(segment).__name__}"
                raise TypeError(msg)
            if isinstance(segment, int) and segment < 0:
                msg = f"Array index segments must be non-negative, got {segment}"
                raise ValueError(msg)

    @classmethod
    def of(cls, *segments: Segment) -> ValuePath:
        """Build a path from positional segments."""
        return cls(tuple(segments))

    def child(self, segment: Segment) -> ValuePath:
        """Return a new path extended by one segment."""
        return ValuePath((*self.segments, segment))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def parts(self) -> tuple[str, ...]:
        """Return every segment in string form (indices as decimal text)."""
        return tuple(str(segment) for segment in self.segments)

    def __str__(self) -> str:
        """Render as ``users[0].name``; the root renders as ``(root)``."""
        if not self.segments:
            return "(root)"
        rendered = ""
        for position, segment in enumerate(self.segments):
            if isinstance(segment, int):
                rendered += f"[{segment}]"
            elif position:
                rendered += f".{segment}"
            else:
                rendered = segment
        return rendered

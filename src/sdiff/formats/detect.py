"""Source format detection."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import PurePath


class FormatHint(StrEnum):
    """Source format of a document; ``auto`` means detect from content."""

    auto = "auto"
    json = "json"
    yaml = "yaml"
    toml = "toml"


_EXTENSIONS: dict[str, FormatHint] = {
    ".json": FormatHint.json,
    ".yaml": FormatHint.yaml,
    ".yml": FormatHint.yaml,
    ".toml": FormatHint.toml,
}

_NULL_DEVICES = frozenset({"/dev/null", "nul", "NUL"})


def detect_format(path: PurePath) -> FormatHint:
    """Return the format implied by a file extension, or ``auto``."""
    return _EXTENSIONS.get(path.suffix.lower(), FormatHint.auto)


def is_null_device(name: str) -> bool:
    """Return True for the null device git passes for added/deleted files."""
    return name in _NULL_DEVICES

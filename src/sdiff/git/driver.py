"""Support for git's external diff driver calling convention.

Git invokes ``diff.<driver>.command`` with seven arguments::

    path old-file old-hex old-mode new-file new-hex new-mode

Added and deleted files are passed as the null device, which the
loaders parse as an empty document.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

DRIVER_ARG_COUNT = 7

_OBJECT_ID = re.compile(r"[0-9a-fA-F]{40}")


def is_object_id(value: str) -> bool:
    """Return True for a 40-character hexadecimal git object id."""
    return _OBJECT_ID.fullmatch(value) is not None


def detect_diff_driver_args(args: Sequence[str]) -> tuple[str, str] | None:
    """Return ``(old_file, new_file)`` when *args* follow the driver convention.

    Args:
        args: Command-line arguments without the program name.
    """
    if len(args) != DRIVER_ARG_COUNT:
        return None
    if not (is_object_id(args[2]) and is_object_id(args[5])):
        return None
    return args[1], args[4]

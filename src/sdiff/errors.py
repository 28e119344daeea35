"""Base exception for sdiff."""

from __future__ import annotations


class SdiffError(Exception):
    """Base class for every error raised by sdiff.

    Concrete errors live next to the code that raises them (for example
    ``CyclicReferenceError`` in :mod:`sdiff.core.value`).
    """

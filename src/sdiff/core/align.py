"""Array alignment strategies.

An alignment is an ordered list of :class:`AlignedPair` entries covering
every old and every new position exactly once:

- both indices set: matched (the elements are compared recursively)
- only ``old_index``: the old element was removed
- only ``new_index``: the new element was added

Two interchangeable strategies produce it:

- positional: index *i* is matched with index *i*; O(n).
- lcs: longest common subsequence under value equality; O(n*m) time and
  space. Only equal elements are matched, so an element that changed in
  place is reported as a removal plus an addition rather than a
  modification.

  Removed elements keep their old index and added elements take their new
  index, so such a removal and addition share a path in the change set.
  They stay distinct by change type: (path, change type) is unique.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sdiff.core.models import ArrayStrategy

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sdiff.core.value import Value

    Equality = Callable[[Value, Value], bool]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignedPair:
    """One step of an alignment."""

    old_index: int | None
    new_index: int | None

    @property
    def is_match(self) -> bool:
        return self.old_index is not None and self.new_index is not None

    @property
    def is_removal(self) -> bool:
        return self.new_index is None

    @property
    def is_addition(self) -> bool:
        return self.old_index is None


def align_positional(old: Sequence[Value], new: Sequence[Value]) -> list[AlignedPair]:
    """Match elements index by index.

    The overlap is matched in order, then any old tail is removed and any
    new tail is added.
    """
    overlap = min(len(old), len(new))
    pairs = [AlignedPair(i, i) for i in range(overlap)]
    pairs.extend(AlignedPair(i, None) for i in range(overlap, len(old)))
    pairs.extend(AlignedPair(None, j) for j in range(overlap, len(new)))
    return pairs


def _lcs_table(old: Sequence[Value], new: Sequence[Value], equals: Equality) -> list[list[int]]:
    """Build the (len(old)+1) x (len(new)+1) table of LCS lengths."""
    table = [[0] * (len(new) + 1) for _ in range(len(old) + 1)]
    for i in range(1, len(old) + 1):
        row, above = table[i], table[i - 1]
        old_item = old[i - 1]
        for j in range(1, len(new) + 1):
            if equals(old_item, new[j - 1]):
                row[j] = above[j - 1] + 1
            else:
                row[j] = max(above[j], row[j - 1])
    return table


def align_lcs(
    old: Sequence[Value],
    new: Sequence[Value],
    equals: Equality,
) -> list[AlignedPair]:
    """Align two sequences on their longest common subsequence.

    Backtracks from the bottom-right corner of the table. Equal elements
    always take the diagonal (a match). Otherwise a step left (addition)
    is preferred on ties, so within a gap removals precede additions once
    the result is put back in forward order.
    """
    table = _lcs_table(old, new, equals)
    pairs: list[AlignedPair] = []
    i, j = len(old), len(new)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and equals(old[i - 1], new[j - 1]):
            i -= 1
            j -= 1
            pairs.append(AlignedPair(i, j))
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            j -= 1
            pairs.append(AlignedPair(None, j))
        else:
            i -= 1
            pairs.append(AlignedPair(i, None))

    pairs.reverse()
    _log.debug(
        "LCS aligned %d old / %d new elements with %d matches",
        len(old),
        len(new),
        table[len(old)][len(new)],
    )
    return pairs


def align(
    old: Sequence[Value],
    new: Sequence[Value],
    strategy: ArrayStrategy,
    equals: Equality,
) -> list[AlignedPair]:
    """Align two sequences with the given strategy.

    Args:
        old: Old-side elements.
        new: New-side elements.
        strategy: Alignment strategy.
        equals: Element equality used by the LCS strategy.

    Returns:
        Ordered alignment covering every position of both sides once.
    """
    if strategy == ArrayStrategy.lcs:
        return align_lcs(old, new, equals)
    return align_positional(old, new)

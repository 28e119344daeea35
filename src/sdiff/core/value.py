"""Normalized, format-agnostic value tree.

Every source format (JSON, YAML, TOML) is reduced to the same closed set of
value kinds before comparison:

- ``Null``, ``Bool``, ``Number``, ``String`` (scalars)
- ``Array`` (ordered sequence of values)
- ``Object`` (ordered mapping of unique string keys to values)

Integers and floats collapse into ``Number`` so that ``30`` and ``30.0``
compare equal. Object key order is kept for display but never affects
equality. Trees are immutable and acyclic; ``build_tree`` enforces the
latter while converting a parser's native document graph.
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from sdiff.errors import SdiffError

if TYPE_CHECKING:
    from collections.abc import Iterator

_log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 1000


class CyclicReferenceError(SdiffError):
    """Raised when a document graph cannot be resolved into a finite tree.

    Self-referential anchors/aliases and nesting deeper than the configured
    maximum depth both end up here. No partial tree is ever returned.
    """


class ValueKind(StrEnum):
    """Kind tag shared by every value class."""

    null = "null"
    boolean = "boolean"
    number = "number"
    string = "string"
    array = "array"
    object = "object"


@dataclass(frozen=True)
class Null:
    """The null value."""

    kind: ClassVar[ValueKind] = ValueKind.null


@dataclass(frozen=True)
class Bool:
    """A boolean value."""

    value: bool
    kind: ClassVar[ValueKind] = ValueKind.boolean


def _as_float(number: float) -> float:
    """Convert an int or float to float, saturating to +/-inf on overflow."""
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


@dataclass(frozen=True, eq=False)
class Number:
    """A numeric value, always stored as a 64-bit float.

    Two numbers are equal when their floats are equal, or when both are NaN.
    This is float equality rather than bit equality: ``0.0 == -0.0``, and
    NaNs compare equal whatever their payload.
    """

    value: float
    kind: ClassVar[ValueKind] = ValueKind.number

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _as_float(self.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        if self.value == other.value:
            return True
        return math.isnan(self.value) and math.isnan(other.value)

    def __hash__(self) -> int:
        if math.isnan(self.value):
            return 0
        return hash(self.value)

    def is_integral(self) -> bool:
        """Return True for finite numbers without a fractional part."""
        return math.isfinite(self.value) and self.value.is_integer()


@dataclass(frozen=True)
class String:
    """A text value."""

    value: str
    kind: ClassVar[ValueKind] = ValueKind.string


@dataclass(frozen=True)
class Array:
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.array

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@dataclass(frozen=True, eq=False)
class Object:
    """An ordered mapping of unique string keys to values.

    Entries are given as ``(key, value)`` pairs. A repeated key keeps the
    position of its first occurrence and the value of its last one.
    Equality ignores entry order.
    """

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(init=False, repr=False, compare=False)
    kind: ClassVar[ValueKind] = ValueKind.object

    def __post_init__(self) -> None:
        index = dict(self.entries)
        object.__setattr__(self, "_index", index)
        if len(index) != len(self.entries):
            object.__setattr__(self, "entries", tuple(index.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
        return hash(frozenset(self._index.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def get(self, key: str) -> Value | None:
        """Return the value stored under *key*, or None if absent."""
        return self._index.get(key)

    def keys(self) -> tuple[str, ...]:
        """Return the keys in insertion order."""
        return tuple(key for key, _ in self.entries)

    def items(self, *, skip_null: bool = False) -> tuple[tuple[str, Value], ...]:
        """Return ``(key, value)`` pairs in insertion order.

        Args:
            skip_null: Leave out entries whose value is ``Null``.
        """
        if not skip_null:
            return self.entries
        return tuple((key, value) for key, value in self.entries if not isinstance(value, Null))


Value = Null | Bool | Number | String | Array | Object

def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim both ends."""
    return " ".join(text.split())


def semantic_equals(
    left: Value,
    right: Value,
    *,
    ignore_whitespace: bool = False,
    null_as_missing: bool = False,
) -> bool:
    """Compare two value trees structurally.

    Args:
        left: First value.
        right: Second value.
        ignore_whitespace: Compare strings after :func:`normalize_whitespace`.
        null_as_missing: Ignore object entries whose value is ``Null``.

    Returns:
        True if the trees are equal under the given rules.
    """
    pending: list[tuple[Value, Value]] = [(left, right)]
    while pending:
        a, b = pending.pop()
        if type(a) is not type(b):
            return False
        if isinstance(a, String) and isinstance(b, String):
            if ignore_whitespace:
                if normalize_whitespace(a.value) != normalize_whitespace(b.value):
                    return False
            elif a.value != b.value:
                return False
        elif isinstance(a, Array) and isinstance(b, Array):
            if len(a) != len(b):
                return False
            pending.extend(zip(a.items, b.items, strict=True))
        elif isinstance(a, Object) and isinstance(b, Object):
            a_map = dict(a.items(skip_null=null_as_missing))
            b_map = dict(b.items(skip_null=null_as_missing))
            if a_map.keys() != b_map.keys():
                return False
            pending.extend((value, b_map[key]) for key, value in a_map.items())
        elif a != b:
            return False
    return True


# -- Tree construction ------------------------------------------------------


def _key_to_str(key: object) -> str:
    """Stringify a mapping key the way YAML/TOML sources spell it."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    if isinstance(key, (_dt.date, _dt.time)):
        return key.isoformat()
    return str(key)


def _build_scalar(node: object) -> Value | None:
    """Convert a scalar node, or return None for containers.

    Raises:
        TypeError: If the node is of an unsupported type.
    """
    if node is None:
        return Null()
    # bool must be checked before int: bool subclasses int
    if isinstance(node, bool):
        return Bool(node)
    if isinstance(node, (int, float)):
        return Number(node)
    if isinstance(node, str):
        return String(node)
    if isinstance(node, (_dt.date, _dt.time)):
        return String(node.isoformat())
    if isinstance(node, (list, tuple, dict)):
        return None
    msg = f"Unsupported document value type: {type(node)!r}"
    raise TypeError(msg)


@dataclass
class _Frame:
    """An open container on the construction stack."""

    source: list[Any] | tuple[Any, ...] | dict[Any, Any]
    children: Iterator[tuple[str | None, Any]]
    keys: list[str] = field(default_factory=list)
    values: list[Value] = field(default_factory=list)

    def close(self) -> Value:
        if isinstance(self.source, dict):
            return Object(tuple(zip(self.keys, self.values, strict=True)))
        return Array(tuple(self.values))


class _TreeBuilder:
    """Iterative graph-to-tree conversion with a cycle guard.

    The identities of the containers on the current ancestor chain are
    tracked; meeting one of them again means the source graph is cyclic.
    A container referenced twice without a cycle is simply copied twice.
    """

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._ancestors: set[int] = set()

    def build(self, graph: object) -> Value:
        leaf = _build_scalar(graph)
        if leaf is not None:
            return leaf

        stack = [self._open(graph, depth=1)]
        while True:
            frame = stack[-1]
            child = next(frame.children, None)

            if child is None:
                stack.pop()
                self._ancestors.discard(id(frame.source))
                built = frame.close()
                if not stack:
                    return built
                stack[-1].values.append(built)
                continue

            key, node = child
            if key is not None:
                frame.keys.append(key)
            leaf = _build_scalar(node)
            if leaf is not None:
                frame.values.append(leaf)
            else:
                stack.append(self._open(node, depth=len(stack) + 1))

    def _open(self, node: Any, *, depth: int) -> _Frame:
        if id(node) in self._ancestors:
            msg = f"Cyclic reference detected at nesting depth {depth}"
            raise CyclicReferenceError(msg)
        if depth > self._max_depth:
            msg = f"Document nesting exceeds the maximum depth of {self._max_depth}"
            raise CyclicReferenceError(msg)

        self._ancestors.add(id(node))
        children: Iterator[tuple[str | None, Any]]
        if isinstance(node, dict):
            children = ((_key_to_str(k), v) for k, v in node.items())
        else:
            children = ((None, v) for v in node)
        return _Frame(source=node, children=children)


def build_tree(graph: object, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Convert a parser's document graph into an immutable value tree.

    Accepts the plain Python data produced by ``json``, ``yaml.safe_load``
    and ``tomllib``: None, bool, int, float, str, list/tuple, dict, and
    date/time objects (converted to ISO-8601 strings).

    Args:
        graph: Root of the parsed document.
        max_depth: Maximum container nesting depth.

    Returns:
        The root Value of an independent, acyclic tree.

    Raises:
        CyclicReferenceError: If the graph references one of its own
            ancestors or nests deeper than *max_depth*.
        TypeError: If the graph contains an unsupported type.
    """
    tree = _TreeBuilder(max_depth).build(graph)
    _log.debug("Built %s tree", tree.kind)
    return tree


def to_python(value: Value) -> Any:
    """Convert a value tree back to plain Python data.

    Integral finite numbers become ``int``; everything else maps to the
    obvious builtin type.
    """
    if isinstance(value, Null):
        return None
    if isinstance(value, (Bool, String)):
        return value.value
    if isinstance(value, Number):
        return int(value.value) if value.is_integral() else value.value
    if isinstance(value, Array):
        return [to_python(item) for item in value.items]
    return {key: to_python(item) for key, item in value.entries}

"""Public API for sdiff.core."""

from __future__ import annotations

from sdiff.core.align import AlignedPair, align, align_lcs, align_positional
from sdiff.core.comparator import StructuralComparator, compute_diff
from sdiff.core.filtering import (
    ChangeFilter,
    FilterConfig,
    PathPattern,
    PatternError,
    filter_changes,
)
from sdiff.core.models import (
    ArrayStrategy,
    Change,
    ChangeSet,
    ChangeType,
    DiffConfig,
    DiffStats,
)
from sdiff.core.paths import ValuePath
from sdiff.core.value import (
    DEFAULT_MAX_DEPTH,
    Array,
    Bool,
    CyclicReferenceError,
    Null,
    Number,
    Object,
    String,
    Value,
    ValueKind,
    build_tree,
    normalize_whitespace,
    semantic_equals,
    to_python,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AlignedPair",
    "Array",
    "ArrayStrategy",
    "Bool",
    "Change",
    "ChangeFilter",
    "ChangeSet",
    "ChangeType",
    "CyclicReferenceError",
    "DiffConfig",
    "DiffStats",
    "FilterConfig",
    "Null",
    "Number",
    "Object",
    "PathPattern",
    "PatternError",
    "String",
    "StructuralComparator",
    "Value",
    "ValueKind",
    "ValuePath",
    "align",
    "align_lcs",
    "align_positional",
    "build_tree",
    "compute_diff",
    "filter_changes",
    "normalize_whitespace",
    "semantic_equals",
    "to_python",
]

"""Tests for sdiff.core public API re-exports."""

from __future__ import annotations

from dataclasses import is_dataclass
from enum import StrEnum

import sdiff.core as core
from sdiff.core import ArrayStrategy, ChangeType, DiffConfig, ValueKind, align, comparator

EXPECTED_NAMES = {
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
}


class TestAllExports:
    """Verify __all__ matches the expected public API surface."""

    def test_all_matches_expected_names(self) -> None:
        assert set(core.__all__) == EXPECTED_NAMES

    def test_all_names_are_importable(self) -> None:
        for name in core.__all__:
            assert hasattr(core, name), f"missing export: {name}"

    def test_all_is_sorted(self) -> None:
        assert core.__all__ == sorted(core.__all__, key=lambda n: (not n.isupper(), n))


class TestExportTypes:
    """Verify exported names have the expected kinds."""

    def test_enums_are_str_enums(self) -> None:
        for enum_type in (ArrayStrategy, ChangeType, ValueKind):
            assert issubclass(enum_type, StrEnum)

    def test_config_is_dataclass(self) -> None:
        assert is_dataclass(DiffConfig)

    def test_align_is_function_not_module(self) -> None:
        assert callable(align)

    def test_submodules_reachable(self) -> None:
        assert hasattr(comparator, "compute_diff")

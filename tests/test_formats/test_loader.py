"""Tests for sdiff.formats.loader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from sdiff.core.value import CyclicReferenceError, Null, Number, Object, String, build_tree
from sdiff.errors import SdiffError
from sdiff.formats.detect import FormatHint
from sdiff.formats.loader import ParseError, parse_bytes, parse_content, parse_file, parse_stdin


class TestParseContent:
    """Verify parsing text in each format."""

    def test_json(self) -> None:
        result = parse_content('{"a": [1, 2.5, null]}', FormatHint.json)
        assert result == build_tree({"a": [1, 2.5, None]})

    def test_yaml(self) -> None:
        result = parse_content("a:\n  - 1\n  - x\n", FormatHint.yaml)
        assert result == build_tree({"a": [1, "x"]})

    def test_toml(self) -> None:
        result = parse_content('title = "t"\n[owner]\nage = 3\n', FormatHint.toml)
        assert result == build_tree({"title": "t", "owner": {"age": 3}})

    def test_toml_dates_become_strings(self) -> None:
        result = parse_content("day = 2024-01-02\n", FormatHint.toml)
        assert isinstance(result, Object)
        assert result.get("day") == String("2024-01-02")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid JSON in <string>"):
            parse_content("{", FormatHint.json)

    def test_invalid_toml_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid TOML"):
            parse_content("= nope", FormatHint.toml)

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid YAML"):
            parse_content("a: [1, 2\n", FormatHint.yaml)

    @pytest.mark.parametrize("text", ["x: !!binary aGVsbG8=\n", "x: !!set {a, b}\n"])
    def test_yaml_values_without_tree_kind_raise(self, text: str) -> None:
        with pytest.raises(ParseError, match="Unsupported value in tagged.yaml"):
            parse_content(text, FormatHint.yaml, source="tagged.yaml")

    def test_unsupported_value_detected_in_auto_mode(self) -> None:
        with pytest.raises(ParseError, match="Unsupported value"):
            parse_content("x: !!set {a, b}\n")

    def test_source_name_in_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_content("{", FormatHint.json, source="cfg.json")
        assert exc_info.value.source == "cfg.json"
        assert isinstance(exc_info.value, SdiffError)

    def test_yaml_numbers_normalize_like_json(self) -> None:
        assert parse_content("30.0", FormatHint.yaml) == parse_content("30", FormatHint.json)


class TestAutoDetection:
    """Verify content-based format detection."""

    def test_json_detected(self) -> None:
        assert parse_content('{"a": 1}') == build_tree({"a": 1})

    def test_toml_detected(self) -> None:
        assert parse_content('a = 1\nb = "x"\n') == build_tree({"a": 1, "b": "x"})

    def test_yaml_detected(self) -> None:
        assert parse_content("a: 1\nb: [x, y]\n") == build_tree({"a": 1, "b": ["x", "y"]})

    def test_blank_text_is_null(self) -> None:
        assert parse_content("  \n") == Null()

    def test_undetectable_raises(self) -> None:
        with pytest.raises(ParseError, match="Could not detect file format for doc"):
            parse_content("a: [1\n", source="doc")


class TestYamlAliases:
    """Verify anchor and alias resolution."""

    def test_shared_alias_is_copied(self) -> None:
        text = "base: &b {x: 1}\nfirst: *b\nsecond: *b\n"
        result = parse_content(text, FormatHint.yaml)
        assert isinstance(result, Object)
        assert result.get("first") == result.get("second") == build_tree({"x": 1})

    def test_recursive_alias_raises(self) -> None:
        with pytest.raises(CyclicReferenceError):
            parse_content("&a [*a]\n", FormatHint.yaml)

    def test_max_depth_is_forwarded(self) -> None:
        with pytest.raises(CyclicReferenceError):
            parse_content("[[[1]]]", FormatHint.json, max_depth=2)


class TestParseBytes:
    """Verify decoding of raw document bytes."""

    def test_utf8(self) -> None:
        assert parse_bytes('{"k": "é"}'.encode(), source="x") == build_tree({"k": "é"})

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(ParseError, match="Failed to decode blob"):
            parse_bytes(b"\xff\xfe\x00", source="blob")


class TestParseFile:
    """Verify file loading."""

    def test_extension_selects_format(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.yaml"
        path.write_text("value: 1\n")
        assert parse_file(path) == build_tree({"value": 1})

    def test_yml_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.yml"
        path.write_text("- a\n")
        assert parse_file(path) == build_tree(["a"])

    def test_unknown_extension_falls_back_to_detection(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.conf"
        path.write_text('{"a": true}')
        assert parse_file(path) == build_tree({"a": True})

    def test_hint_overrides_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("a: 1\n")
        assert parse_file(path, FormatHint.yaml) == build_tree({"a": 1})

    def test_wrong_extension_content_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("a: 1\n")
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.json"
        with pytest.raises(ParseError, match="File not found"):
            parse_file(missing)

    def test_null_device_is_null(self) -> None:
        assert parse_file(Path("/dev/null")) == Null()

    def test_empty_yaml_file_is_null(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert parse_file(path) == Null()


class TestParseStdin:
    """Verify reading from a stream."""

    def test_reads_stream(self) -> None:
        assert parse_stdin(stream=io.StringIO("[1, 2]")) == build_tree([1, 2])

    def test_uses_stdin_source_name(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stdin(FormatHint.json, stream=io.StringIO("{"))
        assert exc_info.value.source == "<stdin>"

    def test_number_value(self) -> None:
        assert parse_stdin(FormatHint.json, stream=io.StringIO("42")) == Number(42)

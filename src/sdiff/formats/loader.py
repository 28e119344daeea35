"""Parsing JSON, YAML and TOML documents into value trees."""

from __future__ import annotations

import json
import logging
import sys
import tomllib
from typing import TYPE_CHECKING, Any

import yaml

from sdiff.core.value import DEFAULT_MAX_DEPTH, Null, build_tree
from sdiff.errors import SdiffError
from sdiff.formats.detect import FormatHint, detect_format, is_null_device

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path
    from typing import TextIO

    from sdiff.core.value import Value

_log = logging.getLogger(__name__)

STDIN_NAME = "-"


class ParseError(SdiffError):
    """Raised when a document cannot be read or parsed.

    Attributes:
        source: File path or pseudo-name (``<stdin>``) of the document.
    """

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source


_LOADERS: dict[FormatHint, tuple[Callable[[str], Any], tuple[type[Exception], ...]]] = {
    FormatHint.json: (json.loads, (json.JSONDecodeError,)),
    FormatHint.yaml: (yaml.safe_load, (yaml.YAMLError,)),
    FormatHint.toml: (tomllib.loads, (tomllib.TOMLDecodeError,)),
}

# YAML accepts almost any text as a plain scalar, so it is tried last.
_AUTO_ORDER = (FormatHint.json, FormatHint.toml, FormatHint.yaml)


def _load(text: str, hint: FormatHint, *, source: str) -> Any:
    """Parse *text* with a specific format into plain Python data."""
    loader, errors = _LOADERS[hint]
    try:
        return loader(text)
    except errors as exc:
        msg = f"Invalid {hint.value.upper()} in {source}: {exc}"
        raise ParseError(msg, source=source) from exc
    except RecursionError as exc:
        msg = f"Document in {source} is nested too deeply to parse"
        raise ParseError(msg, source=source) from exc


def _load_auto(text: str, *, source: str) -> Any:
    """Try each format in turn; the first one that parses wins.

    Blank text is an empty document (null), not an empty TOML table.
    """
    if not text.strip():
        return None
    for hint in _AUTO_ORDER:
        try:
            graph = _load(text, hint, source=source)
        except ParseError:
            continue
        _log.debug("Detected %s content in %s", hint.value, source)
        return graph
    msg = f"Could not detect file format for {source}"
    raise ParseError(msg, source=source)


def parse_content(
    text: str,
    hint: FormatHint = FormatHint.auto,
    *,
    source: str = "<string>",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Parse document text into a value tree.

    Args:
        text: Document text.
        hint: Source format; ``auto`` tries JSON, then TOML, then YAML.
        source: Name used in error messages.
        max_depth: Maximum nesting depth passed to ``build_tree``.

    Returns:
        The root Value. An empty YAML document yields ``Null``.

    Raises:
        ParseError: If the text is not valid in the requested format(s)
            or holds values with no JSON equivalent (YAML !!binary, !!set).
        CyclicReferenceError: If YAML aliases form a cycle.
    """
    if hint == FormatHint.auto:
        graph = _load_auto(text, source=source)
    else:
        graph = _load(text, hint, source=source)
    try:
        return build_tree(graph, max_depth=max_depth)
    except TypeError as exc:
        msg = f"Unsupported value in {source}: {exc}"
        raise ParseError(msg, source=source) from exc


def parse_bytes(
    data: bytes,
    hint: FormatHint = FormatHint.auto,
    *,
    source: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Decode UTF-8 document bytes (e.g. a blob read from git) and parse them.

    Raises:
        ParseError: If the bytes are not UTF-8 or not a valid document.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Failed to decode {source} as UTF-8: {exc}"
        raise ParseError(msg, source=source) from exc
    return parse_content(text, hint, source=source, max_depth=max_depth)


def parse_file(
    path: Path,
    hint: FormatHint = FormatHint.auto,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Read and parse a document file.

    With ``auto`` the format is taken from the extension (.json, .yaml,
    .yml, .toml) and falls back to content detection. The null device
    parses to ``Null`` so that git's added and deleted files compare
    against an empty document.

    Raises:
        ParseError: If the file is missing, unreadable or invalid.
        CyclicReferenceError: If YAML aliases form a cycle.
    """
    source = str(path)
    if is_null_device(source):
        return Null()
    if not path.exists():
        msg = f"File not found: {source}"
        raise ParseError(msg, source=source)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read file {source}: {exc}"
        raise ParseError(msg, source=source) from exc

    if hint == FormatHint.auto:
        hint = detect_format(path)
    _log.debug("Parsing %s (format: %s)", source, hint.value)
    return parse_content(text, hint, source=source, max_depth=max_depth)


def parse_stdin(
    hint: FormatHint = FormatHint.auto,
    *,
    stream: TextIO | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Value:
    """Read a whole document from standard input (or *stream*) and parse it."""
    text = (stream or sys.stdin).read()
    return parse_content(text, hint, source="<stdin>", max_depth=max_depth)

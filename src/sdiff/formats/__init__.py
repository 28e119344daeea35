"""Loading structured documents into value trees."""

from __future__ import annotations

from sdiff.formats.detect import FormatHint, detect_format, is_null_device
from sdiff.formats.loader import (
    STDIN_NAME,
    ParseError,
    parse_bytes,
    parse_content,
    parse_file,
    parse_stdin,
)

__all__ = [
    "STDIN_NAME",
    "FormatHint",
    "ParseError",
    "detect_format",
    "is_null_device",
    "parse_bytes",
    "parse_content",
    "parse_file",
    "parse_stdin",
]

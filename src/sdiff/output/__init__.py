"""Public API for sdiff.output."""

from __future__ import annotations

from sdiff.output.base import OutputFormat, OutputOptions, Renderer
from sdiff.output.json_output import JsonRenderer
from sdiff.output.plain_output import PlainRenderer
from sdiff.output.rich_output import RichRenderer

__all__ = [
    "JsonRenderer",
    "OutputFormat",
    "OutputOptions",
    "PlainRenderer",
    "Renderer",
    "RichRenderer",
]

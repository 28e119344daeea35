"""Semantic diff for structured data (JSON, YAML, TOML)."""

from __future__ import annotations

__version__: str = "0.1.0"

"""Command-line interface for sdiff."""

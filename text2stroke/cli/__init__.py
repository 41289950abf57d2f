"""Command-line interface for text2stroke."""

from text2stroke.cli.main import cli

__all__ = ["cli"]

"""CLI commands for text2stroke."""

from text2stroke.cli.commands.batch import batch
from text2stroke.cli.commands.fonts import fonts
from text2stroke.cli.commands.render import render

__all__ = ["render", "batch", "fonts"]

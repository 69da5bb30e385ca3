"""CLI module for promtext."""

from promtext.cli import config, parse
from promtext.cli.main import app, main_cli

__all__ = [
    "app",
    "main_cli",
    "config",
    "parse",
]

"""Command-line interface for git-grove.

This package provides the CLI entry point, the command table and argument parsing.
"""

from .main import main
from .args import build_parser

__all__ = ["main", "build_parser"]

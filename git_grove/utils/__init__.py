"""Utility functions for git-grove."""

from .paths import make_dirs, is_empty_dir

__all__ = ["make_dirs", "is_empty_dir"]

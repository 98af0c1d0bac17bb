"""
git-grove - Manage git worktrees as sibling directories of a grove
"""

from .__version__ import __version__
from .core import Grove, to_grove, new_grove
from .cli.main import main

__all__ = ["Grove", "to_grove", "new_grove", "main", "__version__"]

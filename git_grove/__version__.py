"""Version information for git-grove."""

__version__ = "0.1.0"

"""Configuration handling for git-grove"""

from dataclasses import dataclass

from git_grove.constants import (
    DEFAULT_GROVE_DIR_MODE,
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_TREE_DIR_MODE,
)


@dataclass
class Config:
    """Configuration for git-grove with validation."""

    verbose: bool = False
    debug: bool = False

    # Deadline for ls-remote and clone, in seconds
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT

    # Modes for directories created by init (grove root) and by add/convert
    grove_dir_mode: int = DEFAULT_GROVE_DIR_MODE
    tree_dir_mode: int = DEFAULT_TREE_DIR_MODE

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_timeout()
        self._validate_mode("grove_dir_mode", self.grove_dir_mode)
        self._validate_mode("tree_dir_mode", self.tree_dir_mode)

    def _validate_remote_timeout(self):
        """Validate remote_timeout is positive."""
        if self.remote_timeout <= 0:
            raise ValueError(f"remote_timeout must be positive, got {self.remote_timeout}")

    @staticmethod
    def _validate_mode(name: str, mode: int):
        """Validate a directory mode is a permission mask the owner can enter."""
        if not 0 <= mode <= 0o7777:
            raise ValueError(f"{name} must be a permission mask, got {mode:#o}")
        if mode & 0o700 != 0o700:
            raise ValueError(f"{name} must grant the owner rwx, got {mode:#o}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "verbose": self.verbose,
            "debug": self.debug,
            "remote_timeout": self.remote_timeout,
            "grove_dir_mode": self.grove_dir_mode,
            "tree_dir_mode": self.tree_dir_mode,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {"verbose", "debug", "remote_timeout", "grove_dir_mode", "tree_dir_mode"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

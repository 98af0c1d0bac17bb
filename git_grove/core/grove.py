"""The grove: a directory holding one repository's worktrees as siblings."""

import os
from typing import List, Optional

from git_grove.config import Config
from git_grove.exceptions import GroveError, ValidationError
from git_grove.logging_config import get_logger
from git_grove.models.worktree import WorktreeInfo
from git_grove.services.git.local import LocalRepository
from git_grove.utils.paths import make_dirs

logger = get_logger(__name__)


class Grove:
    """A grove, located through any worktree inside it."""

    def __init__(self, repo: LocalRepository, config: Optional[Config] = None):
        self.repo = repo
        self.config = config or Config()

    @classmethod
    def open(cls, path: Optional[str] = None, config: Optional[Config] = None) -> "Grove":
        """Open the grove containing ``path`` (the current directory by default).

        ``path`` must be inside the main worktree or a linked worktree of the
        grove's repository; anywhere else grove operations make no sense.
        """
        return cls(LocalRepository(path or os.getcwd()), config)

    def root(self) -> str:
        """Absolute path of the grove's root directory.

        The root is always one directory level above the main worktree.
        """
        main = self.repo.main_worktree()
        return os.path.dirname(os.path.normpath(main))

    def add_tree(self, path: str, branch: Optional[str] = None) -> str:
        """Create a new worktree at ``path``, relative to the grove root unless absolute.

        Missing directories along the way are created with the configured
        tree mode (0700 by default). They are removed again if git fails to
        create the worktree.

        Returns:
            The absolute path of the new worktree
        """
        if not os.path.isabs(path):
            path = os.path.join(self.root(), path)
        path = os.path.normpath(path)

        if os.path.exists(path) and not os.path.isdir(path):
            raise ValidationError(f"{path!r} exists and is not a directory")

        created = make_dirs(path, self.config.tree_dir_mode)
        try:
            self.repo.add_worktree(path, branch=branch)
        except GroveError:
            for directory in reversed(created):
                try:
                    os.rmdir(directory)
                except OSError as e:
                    logger.warning(f"Could not remove {directory}: {e}")
            raise
        return path

    def trees(self) -> List[WorktreeInfo]:
        """All worktrees of the grove's repository, main worktree first."""
        return self.repo.list_worktrees()

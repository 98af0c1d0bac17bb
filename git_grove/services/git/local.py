"""Operations against a local clone of a git repository."""

import os
import stat
from pathlib import Path
from typing import Any, Dict, List, Optional

import git

from git_grove.constants import GIT_STORE_PATH
from git_grove.exceptions import (
    DetachedHeadError,
    GitOperationError,
    GroveIOError,
    RepositoryError,
    ValidationError,
)
from git_grove.logging_config import get_logger
from git_grove.models.worktree import WorktreeInfo
from git_grove.services.git.gitfile import parse_git_link_file

logger = get_logger(__name__)


def git_path(path: str) -> str:
    """Return the path of the .git directory or .git file at the root of a worktree."""
    return os.path.join(path, GIT_STORE_PATH)


def strip_metadata_store(path: str) -> str:
    """Return the worktree root owning the metadata store that ``path`` points into.

    A linked worktree's .git file usually points at its bookkeeping directory
    inside the main worktree's store (``<main>/.git/worktrees/<name>``). The
    root is everything before the last path segment named ``.git``; a path
    with no such segment is already a root.
    """
    parts = Path(path).parts
    for index in range(len(parts) - 1, -1, -1):
        if parts[index] == GIT_STORE_PATH:
            return str(Path(*parts[:index])) if index else path
    return path


def describe_command_error(e: git.exc.GitCommandError) -> str:
    """Summarize a GitCommandError for an error message."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"
    if stderr:
        return f"exit {status}: {stderr}"
    return f"exit code {status}"


class LocalRepository:
    """A repository on the local disk, opened from any directory inside one of its worktrees."""

    def __init__(self, path: str):
        """Open the repository containing ``path``.

        Args:
            path: Any directory inside a worktree; it does not need to be the root

        Raises:
            RepositoryError: If no repository is found at or above ``path``
        """
        self.init_path = path
        try:
            self.repo = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(path, f"is {path!r} a git repo or grove environment? ({e!r})") from e

    def close(self) -> None:
        """Release file handles held by the underlying repository object."""
        self.repo.close()

    def __enter__(self) -> "LocalRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def current_worktree(self) -> str:
        """Return the root directory of the worktree the repository was opened from."""
        if self.repo.bare:
            raise RepositoryError(self.init_path, "cannot determine current worktree of a bare repository")
        # git walks up from the opened path to the nearest .git entry
        try:
            return git.cmd.Git(self.init_path).rev_parse("--show-toplevel")
        except git.exc.GitCommandError as e:
            raise RepositoryError(self.init_path, describe_command_error(e)) from e

    def main_worktree(self) -> str:
        """Return the absolute path of the repository's main worktree.

        If the current worktree has a .git directory it is the main worktree.
        Otherwise its .git file is followed back into the main worktree's
        metadata store.
        """
        current = self.current_worktree()
        dot_git = git_path(current)

        try:
            info = os.stat(dot_git)
        except OSError as e:
            raise GroveIOError(f"failed to read {dot_git!r}: {e}", dot_git) from e
        if stat.S_ISDIR(info.st_mode):
            return current

        linked_path = parse_git_link_file(dot_git)

        if not os.path.isabs(linked_path):
            linked_path = os.path.join(current, linked_path)
        linked_path = os.path.normpath(os.path.abspath(linked_path))

        main = strip_metadata_store(linked_path)
        logger.debug(f"Linked worktree {current} belongs to main worktree {main}")
        return main

    def default_branch(self) -> str:
        """Return the branch checked out in the current worktree."""
        try:
            return self.repo.active_branch.name
        except TypeError as e:
            raise DetachedHeadError(self.current_worktree()) from e

    def add_worktree(self, path: str, branch: Optional[str] = None) -> None:
        """Create a linked worktree in the empty directory at ``path``.

        The worktree is named after the final segment of ``path``. Without
        ``branch``, git checks out (creating it from HEAD if needed) the branch
        with that name.

        Raises:
            ValidationError: If ``path`` is not an empty directory
        """
        if not os.path.isdir(path):
            raise ValidationError(f"{path!r} is not a directory")
        try:
            entries = os.listdir(path)
        except OSError as e:
            raise GroveIOError(f"failed to open directory {path!r}: {e}", path) from e
        if entries:
            raise ValidationError(f"directory {path!r} is not empty")

        main = self.main_worktree()
        args = ["add", path]
        if branch:
            args.append(branch)

        try:
            main_repo = git.Repo(main)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(main, "main worktree could not be opened") from e
        try:
            main_repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree add", path, describe_command_error(e)) from e
        finally:
            main_repo.close()

        logger.info(f"Created worktree {os.path.basename(path)} at {path}")

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees of the repository."""
        try:
            output = self.repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", self.init_path, describe_command_error(e)) from e

        # Porcelain format, one block per worktree separated by blank lines:
        # worktree /path/to/worktree
        # HEAD commit_sha
        # branch refs/heads/branch-name   (or "detached" / "bare")
        worktrees: List[WorktreeInfo] = []
        current: Dict[str, Any] = {}
        for line in output.split("\n") + [""]:
            line = line.strip()

            if not line:
                if current.get("path"):
                    worktrees.append(self._to_worktree_info(current, is_main=not worktrees))
                current = {}
                continue

            if line.startswith("worktree "):
                current["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                current["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                branch_ref = line.split(" ", 1)[1]
                if branch_ref.startswith("refs/heads/"):
                    current["branch"] = branch_ref[len("refs/heads/"):]
                else:
                    current["branch"] = ""
            elif line == "detached":
                current["branch"] = ""

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    @staticmethod
    def _to_worktree_info(entry: Dict[str, Any], is_main: bool) -> WorktreeInfo:
        path = entry["path"]
        return WorktreeInfo(
            path=path,
            branch_name=entry.get("branch", ""),
            commit_sha=entry.get("HEAD", ""),
            is_main=is_main,  # First worktree listed is always the main one
            is_orphaned=not os.path.exists(path),
        )

"""Creation of a new grove from a remote repository."""

import os
from typing import Optional

from git_grove.config import Config
from git_grove.core.grove import Grove
from git_grove.exceptions import ValidationError
from git_grove.logging_config import get_logger
from git_grove.services.git.auth import CredentialSource
from git_grove.services.git.local import LocalRepository
from git_grove.services.git.remote import RemoteRepository
from git_grove.utils.paths import is_empty_dir, make_dirs

logger = get_logger(__name__)


def name_of(url: str) -> str:
    """Determine a repository's name from its URL or path.

    The name is whatever follows the last '/', minus a '.git' suffix.
    """
    index = url.rstrip("/").rfind("/")
    if index < 0:
        raise ValidationError(f"invalid repository path {url!r}: expected at least one '/' character")
    name = url.rstrip("/")[index + 1:]
    if name.endswith(".git"):
        name = name[:-len(".git")]
    if not name:
        raise ValidationError(f"invalid repository path {url!r}: cannot determine repository name")
    return name


def new_or_empty_dir(path: str, mode: int) -> None:
    """Ensure ``path`` is an empty directory, creating it if it does not exist.

    Raises:
        ValidationError: If ``path`` is a file or a non-empty directory
    """
    if not os.path.exists(path):
        make_dirs(path, mode)
        return
    if not os.path.isdir(path):
        raise ValidationError(f"{path!r} is not a directory")
    if not is_empty_dir(path):
        raise ValidationError(f"directory {path!r} is not empty")


def new_grove(
    url: str,
    path: str,
    config: Optional[Config] = None,
    credentials: Optional[CredentialSource] = None,
    all_branches: bool = False,
) -> str:
    """Create a grove for the remote repository ``url`` at ``path``.

    The default branch is cloned into ``<path>/<default-branch>``. With
    ``all_branches``, every other remote branch gets a linked worktree at
    ``<path>/<branch>``.

    Returns:
        The path of the default branch's worktree
    """
    config = config or Config()
    remote = RemoteRepository(url, credentials=credentials, timeout=config.remote_timeout)

    new_or_empty_dir(path, config.grove_dir_mode)

    branch = remote.default_branch()
    default_path = os.path.join(path, branch)
    new_or_empty_dir(default_path, config.tree_dir_mode)

    remote.clone(default_path)
    logger.info(f"Cloned {url} ({branch}) into {default_path}")

    if all_branches:
        _add_remote_branches(default_path, branch, config)

    return default_path


def _add_remote_branches(default_path: str, default_branch: str, config: Config) -> None:
    with LocalRepository(default_path) as repo:
        grove = Grove(repo, config)
        for ref in repo.repo.remotes.origin.refs:
            name = ref.remote_head
            if name in ("HEAD", default_branch):
                continue
            # git checks out a local branch tracking origin/<name>
            tree = grove.add_tree(name, branch=name)
            logger.info(f"Added tree {name} at {tree}")

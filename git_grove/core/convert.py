"""Conversion of an ordinary checkout into a grove."""

import os
import stat
import tempfile
from typing import Optional

from git_grove.config import Config
from git_grove.constants import CONVERT_STAGING_PREFIX
from git_grove.exceptions import GroveIOError, ValidationError
from git_grove.logging_config import get_logger
from git_grove.services.git.local import LocalRepository, git_path
from git_grove.utils.paths import make_dirs

logger = get_logger(__name__)


def _report_stranded(staged: str, destination: str) -> None:
    """Log where the repository content was left after a failed conversion step."""
    logger.error(
        f"Conversion stopped part way: the repository content is at {staged!r}. "
        f"Move it to {destination!r} (or back to its original location) by hand."
    )


def _move(source: str, destination: str) -> None:
    try:
        os.rename(source, destination)
    except OSError as e:
        raise GroveIOError(
            f"failed to move {source!r} to {destination!r}: {e}", source, destination
        ) from e


def to_grove(path: str, config: Optional[Config] = None) -> str:
    """Convert the repository checked out at ``path`` into a grove rooted at ``path``.

    The checkout ends up in ``<path>/<branch>``, named after its checked-out
    branch. The three moves are not transactional: if a later step fails the
    earlier ones are not rolled back, and the error names both sides of the
    failed step.

    Returns:
        The new location of the checkout
    """
    config = config or Config()
    abs_path = os.path.abspath(path)

    # Validate before touching the filesystem
    with LocalRepository(path) as repo:
        current = repo.current_worktree()
        if os.path.realpath(current) != os.path.realpath(abs_path):
            raise ValidationError(f"{abs_path!r} is not the root of its worktree (root is {current!r})")
        if not os.path.isdir(git_path(abs_path)):
            raise ValidationError(f"{abs_path!r} is a linked worktree; only a main worktree can be converted")
        branch = repo.default_branch()

    try:
        mode = stat.S_IMODE(os.stat(abs_path).st_mode)
    except OSError as e:
        raise GroveIOError(f"failed to retrieve file info for {abs_path!r}: {e}", abs_path) from e

    # Staging next to the checkout keeps every move on one filesystem
    parent = os.path.dirname(abs_path)
    try:
        staging = tempfile.mkdtemp(prefix=CONVERT_STAGING_PREFIX, dir=parent)
    except OSError as e:
        raise GroveIOError(f"failed to create temporary directory in {parent!r}: {e}", parent) from e

    staged = os.path.join(staging, os.path.basename(abs_path))
    destination = os.path.join(abs_path, branch)
    try:
        _move(abs_path, staged)
        logger.debug(f"Moved {abs_path} to {staged}")

        try:
            # Recreate the original directory with its original mode
            make_dirs(abs_path, mode)
            make_dirs(os.path.dirname(destination), config.tree_dir_mode)
            _move(staged, destination)
        except GroveIOError:
            _report_stranded(staged, destination)
            raise
    finally:
        # Expect the staging directory to be empty; a leftover is worth a warning
        try:
            os.rmdir(staging)
        except OSError as e:
            logger.warning(f"failed to clean up directory {staging!r}: {e}")

    logger.info(f"Converted {abs_path} into a grove; {branch} is at {destination}")
    return destination

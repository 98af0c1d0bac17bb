"""Reading and writing the .git link file of a linked worktree."""

import os

from git_grove.constants import GIT_FILE_PREFIX
from git_grove.exceptions import FormatError, GroveIOError
from git_grove.logging_config import get_logger

logger = get_logger(__name__)


def _is_local(path: str) -> bool:
    """Return True if a relative path stays inside the directory it is joined to."""
    if not path or os.path.isabs(path):
        return False
    cleaned = os.path.normpath(path)
    return cleaned != os.pardir and not cleaned.startswith(os.pardir + os.sep)


def parse_git_link_file(path: str) -> str:
    """Parse the .git text file at ``path`` and return the path it links to.

    Only the first line is read. It must start with ``gitdir:`` followed by an
    absolute path, or by a relative path that does not climb out of the
    directory it is relative to. Anything after the first line is ignored.

    Args:
        path: Path to the .git file

    Returns:
        The linked path, stripped of the prefix and surrounding whitespace.
        Never empty.

    Raises:
        GroveIOError: If the file cannot be opened or read
        FormatError: If the first line is not a valid ``gitdir:`` entry
    """
    try:
        handle = open(path, encoding="utf-8")
    except OSError as e:
        raise GroveIOError(f"failed to open {path!r}: {e}", path) from e

    try:
        line = handle.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise GroveIOError(f"failed to read {path!r}: {e}", path) from e
    finally:
        try:
            handle.close()
        except OSError as e:
            logger.warning(f"failed to close file {path!r}: {e}")

    line = line.rstrip("\r\n")
    if not line.startswith(GIT_FILE_PREFIX):
        raise FormatError(
            f".git file {path!r} has improper format: missing prefix {GIT_FILE_PREFIX!r} on first line"
        )

    linked_path = line[len(GIT_FILE_PREFIX):].strip()
    if not linked_path or not (os.path.isabs(linked_path) or _is_local(linked_path)):
        raise FormatError(f".git file {path!r} has improper format: invalid path {linked_path!r} specified")

    logger.debug(f"{path} links to {linked_path}")
    return linked_path


def format_git_link(linked_path: str) -> str:
    """Render the content of a .git link file pointing at ``linked_path``."""
    return f"{GIT_FILE_PREFIX} {linked_path}\n"

"""Filesystem helpers shared by the grove commands."""

import os
from typing import List

from git_grove.exceptions import GroveIOError


def make_dirs(path: str, mode: int) -> List[str]:
    """Create ``path`` and every missing parent, each with ``mode``.

    Unlike os.makedirs, the mode applies to intermediate directories too.
    Existing directories are left untouched.

    Returns:
        The directories that were created, outermost first
    """
    missing = []
    current = os.path.abspath(path)
    while not os.path.isdir(current):
        missing.append(current)
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent

    created = []
    for directory in reversed(missing):
        try:
            os.mkdir(directory, mode)
            os.chmod(directory, mode)
        except OSError as e:
            raise GroveIOError(f"failed to create directory {directory!r}: {e}", directory) from e
        created.append(directory)
    return created


def is_empty_dir(path: str) -> bool:
    """Return True if ``path`` is a directory with no entries."""
    try:
        return not os.listdir(path)
    except OSError as e:
        raise GroveIOError(f"failed to open directory {path!r}: {e}", path) from e

"""Custom exceptions for git-grove"""

from typing import Optional


class GroveError(Exception):
    """Base exception for all git-grove errors."""
    pass


class FormatError(GroveError):
    """Exception raised for malformed .git link files and SSH URLs."""
    pass


class GroveIOError(GroveError, OSError):
    """Exception raised when a filesystem operation fails.

    ``destination`` is set for two-sided operations (renames), so that a
    partially completed move can be recovered by hand.
    """

    def __init__(self, message: str, path: str, destination: Optional[str] = None):
        self.path = path
        self.destination = destination
        super().__init__(message)



class ValidationError(GroveError):
    """Exception raised when a target path is not usable for the operation."""
    pass


class RepositoryError(GroveError):
    """Exception raised when a path is not a usable git repository."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        error_msg = f"failed to read git repository {path!r}"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class UnsupportedProtocolError(GroveError):
    """Exception raised when a remote URL's transport cannot be determined."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"could not determine correct transport protocol for {url!r} "
            "(expected one of 'https://<repo>', 'ssh://<repo>', or '<user>@<remote>:<repo>')"
        )


class NoHeadError(GroveError):
    """Exception raised when a remote has no usable default branch."""

    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        super().__init__(message or f"no HEAD ref defined for {url!r}")


class RemoteTimeoutError(GroveError, TimeoutError):
    """Exception raised when a network operation exceeds its deadline."""

    def __init__(self, operation: str, url: str, timeout: float):
        self.operation = operation
        self.url = url
        self.timeout = timeout
        super().__init__(f"{operation} of {url!r} did not complete within {timeout:g} seconds")


class CredentialError(GroveError):
    """Exception raised when credentials cannot be acquired."""
    pass


class GitOperationError(GroveError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for {target!r}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DetachedHeadError(GitOperationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self, path: str):
        super().__init__("default_branch", path, "Repository is in detached HEAD state")

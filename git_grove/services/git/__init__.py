"""Git-related services for git-grove."""

from .gitfile import parse_git_link_file, format_git_link
from .local import LocalRepository
from .auth import AuthResolver, ConsoleCredentialSource, CredentialSource, classify_url
from .remote import RemoteRepository

__all__ = [
    "parse_git_link_file",
    "format_git_link",
    "LocalRepository",
    "AuthResolver",
    "ConsoleCredentialSource",
    "CredentialSource",
    "classify_url",
    "RemoteRepository",
]

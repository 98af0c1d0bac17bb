"""Transport detection and authentication for remote repositories.

Supported URL formats are:
  - prefixed with http:// or https:// for HTTP(S)
  - prefixed with ssh:// for SSH
  - formatted as <user>@<remote>:<repo> for SSH

Other formats, such as 'git://' and 'ftp://', are understood by git itself but
not by this module. Local repositories (/path/to/repo or file:///path/to/repo)
are likewise not supported.
"""

import os
import re
import shlex
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from rich.console import Console

from git_grove.constants import (
    HTTP_AUTH_PASSWORD_PROMPT,
    HTTP_AUTH_USERNAME_PROMPT,
    HTTP_PREFIXES,
    SSH_PREFIX,
    SSH_SCP_PATTERN,
)
from git_grove.exceptions import CredentialError, FormatError, UnsupportedProtocolError
from git_grove.logging_config import get_logger
from git_grove.models.remote import AuthMethod, HttpBasicAuth, SshAgentAuth, TransportClass

logger = get_logger(__name__)

_SSH_SCP_RE = re.compile(SSH_SCP_PATTERN)


def classify_url(url: str) -> TransportClass:
    """Determine the transport protocol of a remote URL.

    Raises:
        UnsupportedProtocolError: If the URL matches none of the supported formats
    """
    if url.startswith(HTTP_PREFIXES):
        return TransportClass.HTTP
    if url.startswith(SSH_PREFIX) or _SSH_SCP_RE.search(url):
        return TransportClass.SSH
    raise UnsupportedProtocolError(url)


def ssh_username(url: str) -> str:
    """Extract the user name from an SSH URL.

    Raises:
        FormatError: If the URL does not contain exactly one '@'
    """
    tokens = url[len(SSH_PREFIX):].split("@") if url.startswith(SSH_PREFIX) else url.split("@")
    if len(tokens) != 2:
        raise FormatError(
            f"invalid format: expected exactly one '@' character for SSH authentication, found {len(tokens) - 1}"
        )
    return tokens[0]


class CredentialSource(ABC):
    """Supplies a username and password for HTTP(S) authentication."""

    @abstractmethod
    def read_username(self) -> str:
        pass

    @abstractmethod
    def read_password(self) -> str:
        pass


class ConsoleCredentialSource(CredentialSource):
    """Interactively queries the user on the terminal.

    The username is echoed; the password is not.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def read_username(self) -> str:
        try:
            return self.console.input(HTTP_AUTH_USERNAME_PROMPT).strip()
        except EOFError as e:
            raise CredentialError("failed to read username entry: no input available") from e

    def read_password(self) -> str:
        try:
            return self.console.input(HTTP_AUTH_PASSWORD_PROMPT, password=True)
        except EOFError as e:
            raise CredentialError("failed to read password entry: no input available") from e


class AuthResolver:
    """Resolves the authentication method for one remote URL.

    HTTP(S) credentials are acquired on first use and cached for the lifetime
    of the resolver, so one command never prompts twice. SSH authentication
    always goes through ssh-agent; keyfiles and passphrases are not accepted.
    """

    def __init__(
        self,
        url: str,
        credentials: Optional[CredentialSource] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.url = url
        self.transport = classify_url(url)
        self.credentials = credentials or ConsoleCredentialSource()
        self.environ = os.environ if environ is None else environ
        self._http_auth: Optional[HttpBasicAuth] = None

    def auth_method(self) -> AuthMethod:
        """Return the authentication method for the resolver's URL."""
        if self.transport is TransportClass.HTTP:
            return self._cached_http_auth()
        return self._ssh_auth()

    def _cached_http_auth(self) -> HttpBasicAuth:
        if self._http_auth is not None:
            return self._http_auth

        username = self.credentials.read_username()
        password = self.credentials.read_password()
        # cache to avoid re-querying the user
        self._http_auth = HttpBasicAuth(username=username, password=password)
        logger.debug(f"Acquired HTTP credentials for user {username!r}")
        return self._http_auth

    def _ssh_auth(self) -> SshAgentAuth:
        user = ssh_username(self.url)
        agent_socket = self.environ.get("SSH_AUTH_SOCK")
        if not agent_socket:
            raise CredentialError(f"cannot authenticate {user!r} with {self.url!r}: SSH_AUTH_SOCK is not set")
        return SshAgentAuth(username=user, agent_socket=agent_socket)


def git_environment(auth: AuthMethod) -> Dict[str, str]:
    """Environment variables that make a git subprocess use ``auth``.

    Nothing is written to the repository's configuration.
    """
    env = {"GIT_TERMINAL_PROMPT": "0"}
    if isinstance(auth, HttpBasicAuth):
        env.update({
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": auth.header(),
        })
    elif isinstance(auth, SshAgentAuth):
        env.update({
            "SSH_AUTH_SOCK": auth.agent_socket,
            "GIT_SSH_COMMAND": f"ssh -o BatchMode=yes -l {shlex.quote(auth.username)}",
        })
    else:
        raise TypeError(f"unsupported authentication method: {auth!r}")
    return env

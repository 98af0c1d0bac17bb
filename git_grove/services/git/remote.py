"""Operations against a remote git repository."""

import os
import signal
import subprocess
from typing import Dict, Mapping, Optional

import git

from git_grove.constants import DEFAULT_REMOTE_TIMEOUT, REF_PREFIXES
from git_grove.exceptions import GitOperationError, NoHeadError, RemoteTimeoutError
from git_grove.logging_config import get_logger
from git_grove.models.remote import AuthMethod
from git_grove.services.git.auth import AuthResolver, CredentialSource, git_environment

logger = get_logger(__name__)


def short_ref_name(ref: str) -> str:
    """Shorten a full ref name, e.g. refs/heads/main -> main."""
    for prefix in REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def parse_symref_listing(output: str) -> Dict[str, str]:
    """Parse ``git ls-remote --symref`` output into a {ref: target} mapping.

    Symbolic refs map to the ref they point at; ordinary refs map to their
    object id. A symref line always precedes the plain line for the same ref,
    so symbolic targets win.
    """
    refs: Dict[str, str] = {}
    for line in output.splitlines():
        if "\t" not in line:
            continue
        value, name = line.split("\t", 1)
        name = name.strip()
        if value.startswith("ref: "):
            refs[name] = value[len("ref: "):].strip()
        else:
            refs.setdefault(name, "")
    return refs


class RemoteRepository:
    """A remote repository identified by its URL.

    The transport is determined when the object is created, so an unsupported
    URL fails before any network or filesystem work happens.
    """

    def __init__(
        self,
        url: str,
        credentials: Optional[CredentialSource] = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.resolver = AuthResolver(url, credentials=credentials, environ=environ)

    def _git(self) -> git.cmd.Git:
        """Get a git command runner not bound to any repository."""
        return git.cmd.Git()

    def auth_method(self) -> AuthMethod:
        return self.resolver.auth_method()

    def _run(self, operation: str, *args: str) -> str:
        """Run an authenticated network git command within the deadline.

        git runs in its own session so that the transport it spawns
        (git -> sh -> ssh, or git-remote-https) is killed along with it when
        the deadline passes.
        """
        env = git_environment(self.auth_method())
        runner = self._git()
        command = [git.cmd.Git.GIT_PYTHON_GIT_EXECUTABLE, operation, *args]
        with runner.custom_environment(**env):
            # the wrapper terminates the process when collected, so keep it alive
            handle = runner.execute(command, as_process=True, start_new_session=True)
        process = handle.proc

        try:
            stdout, stderr = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            _kill_session(process)
            raise RemoteTimeoutError(operation, self.url, self.timeout) from e

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            status = f"exit {process.returncode}"
            raise GitOperationError(operation, self.url, f"{status}: {message}" if message else status)
        return stdout.decode("utf-8", errors="replace")

    def default_branch(self) -> str:
        """Determine the default branch of the remote from the target of its HEAD ref.

        Raises:
            NoHeadError: If the remote has no HEAD, or HEAD is not symbolic
        """
        output = self._run("ls-remote", "--symref", self.url, "HEAD")
        refs = parse_symref_listing(output)

        if "HEAD" not in refs:
            raise NoHeadError(self.url)
        branch = short_ref_name(refs["HEAD"])
        if not branch:
            raise NoHeadError(self.url, f"HEAD ref for {self.url!r} is missing target")

        logger.debug(f"Default branch of {self.url} is {branch}")
        return branch

    def clone(self, path: str) -> None:
        """Authenticate to the remote and clone it into ``path``."""
        logger.info(f"Cloning {self.url} into {path}")
        self._run("clone", "--", self.url, path)


def _kill_session(process: subprocess.Popen) -> None:
    """Kill every process in the session led by ``process`` and reap it."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    process.communicate()

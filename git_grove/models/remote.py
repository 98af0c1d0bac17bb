"""Remote transport and authentication models."""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TransportClass(Enum):
    """Protocol family of a remote URL."""
    HTTP = "http"
    SSH = "ssh"


@dataclass(frozen=True)
class HttpBasicAuth:
    """Username/password credential for HTTP(S) remotes."""
    username: str
    password: str = field(repr=False)

    def header(self) -> str:
        """Value of the Authorization header sent to the remote."""
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return f"Authorization: Basic {token}"


@dataclass(frozen=True)
class SshAgentAuth:
    """SSH credential backed by the running ssh-agent."""
    username: str
    agent_socket: str


AuthMethod = Union[HttpBasicAuth, SshAgentAuth]

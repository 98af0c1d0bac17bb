"""Data models for git-grove."""

from .worktree import WorktreeInfo
from .remote import TransportClass, HttpBasicAuth, SshAgentAuth, AuthMethod

__all__ = ["WorktreeInfo", "TransportClass", "HttpBasicAuth", "SshAgentAuth", "AuthMethod"]

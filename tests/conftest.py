"""Pytest fixtures for git-grove tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest
from rich.console import Console

from git_grove.services.git.auth import CredentialSource


def _init_repo(repo_path: Path) -> git.Repo:
    """Initialize a repository with one commit on 'main'."""
    repo_path.mkdir(parents=True)
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create an ordinary repository checkout for testing."""
    repo = _init_repo(temp_dir / "test_repo")
    yield repo
    repo.close()


@pytest.fixture
def grove_repo(temp_dir):
    """Create a grove whose main worktree is <temp>/grove/main."""
    repo = _init_repo(temp_dir / "grove" / "main")
    yield repo
    repo.close()


@pytest.fixture
def linked_worktree(grove_repo):
    """Add a linked worktree at <temp>/grove/feature and return its path."""
    path = Path(grove_repo.working_tree_dir).parent / "feature"
    grove_repo.git.worktree("add", str(path))
    return path


class FakeCredentialSource(CredentialSource):
    """Canned credentials that count how often they were asked for."""

    def __init__(self, username="alice", password="s3cret"):
        self.username = username
        self.password = password
        self.prompts = 0

    def read_username(self):
        self.prompts += 1
        return self.username

    def read_password(self):
        return self.password


@pytest.fixture
def fake_credentials():
    """Credential source that never touches the terminal."""
    return FakeCredentialSource()


@pytest.fixture
def mock_console():
    """Create a mock rich console."""
    return Mock(spec=Console)

"""Tests for creating a grove from a remote repository"""
from pathlib import Path
from unittest.mock import MagicMock, patch

import git
import pytest

from git_grove.config import Config
from git_grove.core.initialize import name_of, new_grove, new_or_empty_dir
from git_grove.exceptions import UnsupportedProtocolError, ValidationError


class TestNameOf:
    """Test repository name detection."""

    @pytest.mark.parametrize("url,name", [
        ("https://github.com/torvalds/linux.git", "linux"),
        ("git@github.com:org/repo.git", "repo"),
        ("ssh://git@host/team/project", "project"),
        ("https://host/repo/", "repo"),
    ])
    def test_name_of(self, url, name):
        assert name_of(url) == name

    def test_no_slash(self):
        with pytest.raises(ValidationError, match="at least one '/'"):
            name_of("git@host:repo.git")

    def test_empty_name(self):
        with pytest.raises(ValidationError):
            name_of("https://host/.git")


class TestNewOrEmptyDir:
    """Test grove directory validation."""

    def test_creates_missing_directory(self, temp_dir):
        target = temp_dir / "a" / "b"
        new_or_empty_dir(str(target), 0o755)
        assert target.is_dir()

    def test_accepts_empty_directory(self, temp_dir):
        new_or_empty_dir(str(temp_dir), 0o755)

    def test_rejects_non_empty_directory(self, temp_dir):
        (temp_dir / "file.txt").write_text("x")
        with pytest.raises(ValidationError, match="not empty"):
            new_or_empty_dir(str(temp_dir), 0o755)

    def test_rejects_file(self, temp_dir):
        target = temp_dir / "file.txt"
        target.write_text("x")
        with pytest.raises(ValidationError, match="not a directory"):
            new_or_empty_dir(str(target), 0o755)


@pytest.fixture
def source_repo(git_repo):
    """A repository with an extra branch, standing in for the remote."""
    git_repo.git.checkout("-b", "develop")
    path = Path(git_repo.working_tree_dir)
    (path / "develop.txt").write_text("develop\n")
    git_repo.index.add(["develop.txt"])
    git_repo.index.commit("Develop work")
    git_repo.git.checkout("main")
    return git_repo


@pytest.fixture
def fake_remote(source_repo):
    """Patch RemoteRepository so that cloning copies the local source repository."""
    remote = MagicMock()
    remote.default_branch.return_value = "main"
    remote.clone.side_effect = lambda path: git.Repo.clone_from(source_repo.working_tree_dir, path).close()
    with patch("git_grove.core.initialize.RemoteRepository", return_value=remote) as remote_cls:
        yield remote_cls


class TestNewGrove:
    """Test grove creation."""

    def test_clones_default_branch(self, fake_remote, temp_dir):
        grove = temp_dir / "linux"
        default_tree = new_grove("https://github.com/torvalds/linux.git", str(grove))

        assert Path(default_tree) == grove / "main"
        assert (grove / "main" / ".git").is_dir()
        assert (grove / "main" / "README.md").exists()
        assert sorted(p.name for p in grove.iterdir()) == ["main"]

    def test_remote_created_with_configured_timeout(self, fake_remote, temp_dir):
        new_grove("https://host/repo.git", str(temp_dir / "repo"), Config(remote_timeout=5))

        _, kwargs = fake_remote.call_args
        assert kwargs["timeout"] == 5

    def test_all_branches(self, fake_remote, temp_dir):
        grove = temp_dir / "project"
        new_grove("https://host/project.git", str(grove), all_branches=True)

        assert (grove / "develop" / ".git").is_file()
        assert (grove / "develop" / "develop.txt").exists()
        with git.Repo(grove / "develop") as repo:
            assert repo.active_branch.name == "develop"
            assert repo.active_branch.tracking_branch().name == "origin/develop"

    def test_non_empty_target_rejected_before_network(self, fake_remote, temp_dir):
        grove = temp_dir / "busy"
        grove.mkdir()
        (grove / "file.txt").write_text("x")

        with pytest.raises(ValidationError):
            new_grove("https://host/busy.git", str(grove))

        fake_remote.return_value.default_branch.assert_not_called()

    def test_unsupported_url_touches_nothing(self, temp_dir):
        target = temp_dir / "repo"
        with pytest.raises(UnsupportedProtocolError):
            new_grove("ftp://host/repo", str(target))
        assert not target.exists()

"""Tests for the Grove layout"""
import stat
from pathlib import Path

import pytest

from git_grove.config import Config
from git_grove.core.grove import Grove
from git_grove.exceptions import GitOperationError, RepositoryError, ValidationError
from git_grove.services.git.local import LocalRepository


def _resolved(path):
    return Path(path).resolve()


class TestGroveRoot:
    """Test grove root detection."""

    def test_root_from_main_worktree(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir)
        assert _resolved(grove.root()) == temp_dir / "grove"

    def test_root_from_linked_worktree(self, grove_repo, linked_worktree, temp_dir):
        grove = Grove.open(str(linked_worktree))
        assert _resolved(grove.root()) == temp_dir / "grove"

    def test_root_is_idempotent(self, grove_repo):
        grove = Grove.open(grove_repo.working_tree_dir)
        assert grove.root() == grove.root()

    def test_open_defaults_to_current_directory(self, grove_repo, temp_dir, monkeypatch):
        monkeypatch.chdir(grove_repo.working_tree_dir)
        assert _resolved(Grove.open().root()) == temp_dir / "grove"

    def test_open_outside_repository(self, temp_dir):
        with pytest.raises(RepositoryError):
            Grove.open(str(temp_dir))


class TestAddTree:
    """Test adding trees to the grove."""

    def test_add_relative_tree(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir)
        path = grove.add_tree("rel/path")

        target = temp_dir / "grove" / "rel" / "path"
        assert _resolved(path) == target
        assert (target / ".git").is_file()
        assert (target / "README.md").read_text() == "# Test Repository\n"

        # The new tree finds its way back to the same main worktree
        with LocalRepository(str(target)) as repo:
            assert _resolved(repo.main_worktree()) == _resolved(grove_repo.working_tree_dir)

    def test_intermediate_directories_owner_only(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir)
        grove.add_tree("team/topic")

        mode = stat.S_IMODE((temp_dir / "grove" / "team").stat().st_mode)
        assert mode == 0o700

    def test_configured_tree_mode(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir, Config(tree_dir_mode=0o750))
        grove.add_tree("shared/topic")

        mode = stat.S_IMODE((temp_dir / "grove" / "shared").stat().st_mode)
        assert mode == 0o750

    def test_add_absolute_tree(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir)
        target = temp_dir / "elsewhere" / "hotfix"
        grove.add_tree(str(target))

        assert (target / ".git").is_file()
        assert "hotfix" in [head.name for head in grove_repo.heads]

    def test_add_from_linked_worktree(self, grove_repo, linked_worktree, temp_dir):
        grove = Grove.open(str(linked_worktree))
        grove.add_tree("sibling")
        assert (temp_dir / "grove" / "sibling" / ".git").is_file()

    def test_add_into_non_empty_directory(self, grove_repo, temp_dir):
        target = temp_dir / "occupied"
        target.mkdir()
        (target / "notes.txt").write_text("keep me")

        grove = Grove.open(grove_repo.working_tree_dir)
        with pytest.raises(ValidationError):
            grove.add_tree(str(target))

        assert not (target / ".git").exists()
        assert (target / "notes.txt").read_text() == "keep me"
        assert len(grove.trees()) == 1

    def test_add_onto_existing_file(self, grove_repo, temp_dir):
        (temp_dir / "grove" / "plain-file").write_text("x")
        grove = Grove.open(grove_repo.working_tree_dir)
        with pytest.raises(ValidationError, match="not a directory"):
            grove.add_tree("plain-file")

    def test_failed_add_removes_created_directories(self, grove_repo, temp_dir):
        grove = Grove.open(grove_repo.working_tree_dir)
        # main is already checked out in the main worktree
        with pytest.raises(GitOperationError):
            grove.add_tree("nested/main")

        assert not (temp_dir / "grove" / "nested").exists()
        assert len(grove.trees()) == 1

    def test_failed_add_keeps_existing_directories(self, grove_repo, temp_dir):
        existing = temp_dir / "grove" / "existing"
        existing.mkdir()
        grove = Grove.open(grove_repo.working_tree_dir)
        with pytest.raises(GitOperationError):
            grove.add_tree("existing/main")

        assert existing.is_dir()
        assert not (existing / "main").exists()


class TestTrees:
    """Test listing trees."""

    def test_trees(self, grove_repo, linked_worktree):
        grove = Grove.open(grove_repo.working_tree_dir)
        trees = grove.trees()
        assert [tree.is_main for tree in trees] == [True, False]
        assert [Path(tree.path).name for tree in trees] == ["main", "feature"]

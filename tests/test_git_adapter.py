"""Tests for the git subprocess wrapper."""

import subprocess
from pathlib import Path

import pytest

from carapace.git.adapter import GitError, get_range_diff, get_repo_root, get_staged_diff
from carapace.git.diff_parser import parse_diff
from carapace.git.models import FileStatus


def _commit(repo: Path, name: str, content: str, message: str) -> None:
    (repo / name).write_text(content)
    subprocess.run(["git", "add", name], cwd=repo, capture_output=True, check=True)
    subprocess.run(["git", "commit", "-m", message], cwd=repo, capture_output=True, check=True)


class TestRepoRoot:
    def test_from_subdirectory(self, tmp_git_repo: Path):
        sub = tmp_git_repo / "pkg"
        sub.mkdir()
        assert get_repo_root(sub).resolve() == tmp_git_repo.resolve()

    def test_outside_repo(self, tmp_path: Path):
        with pytest.raises(GitError):
            get_repo_root(tmp_path)


class TestDiffs:
    def test_staged_empty(self, tmp_git_repo: Path):
        assert get_staged_diff(tmp_git_repo) == ""

    def test_staged_new_file(self, tmp_git_repo: Path):
        (tmp_git_repo / "app.py").write_text("print('hi')\n")
        subprocess.run(["git", "add", "app.py"], cwd=tmp_git_repo, capture_output=True)
        (f,) = parse_diff(get_staged_diff(tmp_git_repo))
        assert f.path == "app.py"
        assert f.status == FileStatus.ADDED
        assert f.additions == 1

    def test_range_diff(self, tmp_git_repo: Path):
        _commit(tmp_git_repo, "README.md", "# Test\nmore\n", "second")
        (f,) = parse_diff(get_range_diff(tmp_git_repo, "HEAD~1"))
        assert f.path == "README.md"
        assert f.status == FileStatus.MODIFIED
        assert f.additions == 1

    def test_bad_ref(self, tmp_git_repo: Path):
        with pytest.raises(GitError):
            get_range_diff(tmp_git_repo, "no-such-ref")

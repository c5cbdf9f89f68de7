from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from buildstamp.identity import BuildIdentity


class GitRepo:
    """A throwaway git repository driven through the git CLI."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def git(self, *args: str) -> str:
        r = subprocess.run(
            ["git", "-C", str(self.path), *args],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
        return r.stdout.strip()

    def write(self, name: str, text: str) -> Path:
        p = self.path / name
        p.write_text(text, encoding="utf-8")
        return p

    def commit(self, message: str, *, filename: str = "README.md") -> str:
        self.write(filename, f"{message}\n")
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD")


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Isolate from the user's git config and pin commit metadata.
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "buildstamp-tests")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "buildstamp-tests@example.invalid")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "buildstamp-tests")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "buildstamp-tests@example.invalid")
    monkeypatch.setenv("GIT_AUTHOR_DATE", "1970-01-01T00:00:00Z")
    monkeypatch.setenv("GIT_COMMITTER_DATE", "1970-01-01T00:00:00Z")


@pytest.fixture
def empty_repo(tmp_path: Path, git_env: None) -> GitRepo:
    path = tmp_path / "repo"
    path.mkdir()
    repo = GitRepo(path)
    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/main")
    return repo


@pytest.fixture
def git_repo(empty_repo: GitRepo) -> GitRepo:
    empty_repo.commit("Initial commit")
    return empty_repo


@pytest.fixture
def not_a_repo(tmp_path: Path, git_env: None) -> Path:
    path = tmp_path / "plain"
    path.mkdir()
    return path


@pytest.fixture
def sample_identity() -> BuildIdentity:
    return BuildIdentity(
        commit_hash="abc1234def5678abc1234def5678abc1234def56",
        branch="main",
        tag="v1.0.0",
        describe="v1.0.0",
        short_hash="abc1234",
        is_clean=True,
        is_clean_ignoring_untracked=True,
    )

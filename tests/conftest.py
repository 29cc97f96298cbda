"""Shared test fixtures for the status line."""

import shutil
import subprocess

import pytest


def git(repo, *args):
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def isolated_dir(tmp_path, monkeypatch):
    """A directory git will never treat as part of an enclosing repository."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    plain = tmp_path / "plain"
    plain.mkdir()
    return plain


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A real git repository on branch main with one committed file."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    repo = tmp_path / "myproj"
    repo.mkdir()
    git(repo, "init")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "notes.txt").write_text("one\ntwo\nthree\n")
    git(repo, "add", "notes.txt")
    git(repo, "commit", "-m", "initial")
    return repo

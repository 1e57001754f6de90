import os
import subprocess
from pathlib import Path

import pytest


def git(*args: str, cwd: Path | None = None, env: dict | None = None) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd, capture_output=True, check=True, text=True, env=env,
    )
    return result.stdout


def commit_file(
    repo: Path,
    file_path: str,
    content: str,
    message: str,
    author_name: str = "Test User",
    author_email: str = "test@example.com",
) -> str:
    """Write, stage and commit one file; return the new commit hash."""
    full_path = repo / file_path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(content)

    git("-C", str(repo), "add", file_path)
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": author_name,
        "GIT_AUTHOR_EMAIL": author_email,
        "GIT_COMMITTER_NAME": author_name,
        "GIT_COMMITTER_EMAIL": author_email,
    }
    git("-C", str(repo), "commit", "-q", "-m", message, env=env)
    return git("-C", str(repo), "rev-parse", "HEAD").strip()


def init_work_repo(path: Path, branch: str = "main") -> Path:
    git("init", "-q", str(path))
    git("-C", str(path), "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    git("-C", str(path), "config", "user.name", "Test User")
    git("-C", str(path), "config", "user.email", "test@example.com")
    return path


def clone_bare(work: Path, root: Path, name: str) -> Path:
    bare = root / name
    git("clone", "-q", "--bare", str(work), str(bare))
    return bare


def init_bare(root: Path, name: str, branch: str = "main") -> Path:
    """Create an empty bare repository whose HEAD is an unborn *branch*."""
    bare = root / name
    git("init", "-q", "--bare", str(bare))
    git("-C", str(bare), "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    return bare


def detach_head(bare: Path, commit: str) -> None:
    git("-C", str(bare), "update-ref", "--no-deref", "HEAD", commit)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Directory that holds the bare repositories under test."""
    root = tmp_path / "repos"
    root.mkdir()
    return root


@pytest.fixture
def work_repo(tmp_path: Path) -> Path:
    """Working repository with 3 commits on main and a feature branch."""
    work = init_work_repo(tmp_path / "work")
    commit_file(work, "README.md", "# Project\n", "Initial commit")
    commit_file(work, "src/main.py", "print('hello')\n", "Add main module")
    git("-C", str(work), "branch", "feature")
    commit_file(work, "src/utils.py", "X = 1\n", "Add utils")
    return work


@pytest.fixture
def populated_root(repo_root: Path, work_repo: Path) -> Path:
    """Root with two cloned repositories, one empty repository and a stray file.

    alpha.git  -> on main, 3 commits
    beta.git   -> detached at the second commit of main
    empty.git  -> no commits, HEAD on unborn main
    notes.txt  -> regular file, never a repository
    """
    clone_bare(work_repo, repo_root, "alpha.git")
    beta = clone_bare(work_repo, repo_root, "beta.git")
    second = git("-C", str(work_repo), "rev-parse", "HEAD~1").strip()
    detach_head(beta, second)
    init_bare(repo_root, "empty.git")
    (repo_root / "notes.txt").write_text("not a repository\n")
    return repo_root

import logging

from git_shelf.application.git_output import (
    is_detached,
    parse_branch_list,
    parse_commit_log,
    parse_file_list,
    parse_ref_name,
    parse_symbolic_ref,
)
from git_shelf.domain.errors import ProcessFailed, ResolutionFailed
from git_shelf.domain.models import CommitRecord
from git_shelf.domain.ports import ProcessRunner

logger = logging.getLogger(__name__)

# Keep non-ASCII paths verbatim instead of octal-escaped and quoted.
_VERBATIM_PATHS = ("-c", "core.quotePath=false")


def _has_commits(runner: ProcessRunner, repo_path: str) -> bool:
    """Whether HEAD points at a commit. An unborn branch exits with status 1."""
    try:
        runner.run(repo_path, "rev-parse", "--verify", "-q", "HEAD")
    except ProcessFailed as e:
        if e.returncode == 1:
            return False
        raise
    return True


def resolve_reference(runner: ProcessRunner, repo_path: str, explicit_ref: str = "") -> str:
    """Return the reference to browse *repo_path* at.

    An explicit reference is trusted verbatim. Otherwise the branch HEAD
    points to is used, even before its first commit, or the full commit
    hash when HEAD is detached.
    """
    if explicit_ref:
        return explicit_ref

    try:
        ref = parse_symbolic_ref(runner.run(repo_path, "symbolic-ref", "-q", "HEAD"))
    except ProcessFailed as e:
        # Exit status 1: HEAD holds a commit id rather than a branch.
        if e.returncode != 1:
            raise
        ref = _detached_commit(runner, repo_path)

    if not ref or is_detached(ref):
        logger.error("no usable head repo_path=%s head=%r", repo_path, ref)
        raise ResolutionFailed(repo_path, explicit_ref)
    return ref


def _detached_commit(runner: ProcessRunner, repo_path: str) -> str:
    try:
        return parse_ref_name(runner.run(repo_path, "rev-parse", "--verify", "-q", "HEAD"))
    except ProcessFailed as e:
        if e.returncode != 1:
            raise
        raise ResolutionFailed(repo_path) from e


def list_files(runner: ProcessRunner, repo_path: str, ref: str) -> list[str]:
    """Tracked paths at *ref*, recursively, in the order git reports them."""
    try:
        output = runner.run(
            repo_path, *_VERBATIM_PATHS,
            "ls-tree", "-r", "--name-only", "--end-of-options", ref,
        )
    except ProcessFailed:
        if not _has_commits(runner, repo_path):
            return []
        logger.error("ls-tree failed repo_path=%s ref=%s", repo_path, ref)
        raise
    return parse_file_list(output)


def list_branches(runner: ProcessRunner, repo_path: str) -> list[str]:
    return parse_branch_list(runner.run(repo_path, "branch", "--no-color"))


def list_commits(runner: ProcessRunner, repo_path: str, ref: str = "") -> list[CommitRecord]:
    """History reachable from *ref* (the current head when empty), newest first."""
    args = ["log", "--oneline", "--no-color", "--no-decorate"]
    if ref:
        args += ["--end-of-options", ref]
    try:
        output = runner.run(repo_path, *args)
    except ProcessFailed:
        if not _has_commits(runner, repo_path):
            return []
        raise
    return parse_commit_log(output)

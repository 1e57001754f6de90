"""Parsers for the line-oriented output of git plumbing commands.

Each parser takes the raw stdout text and returns plain data; none of them
touch a process, so they can be exercised with literal strings.
"""
from __future__ import annotations

from git_shelf.domain.models import CommitRecord

# What `git rev-parse --abbrev-ref HEAD` prints when HEAD is detached or
# unborn; never a usable head.
DETACHED_SENTINEL = "HEAD"

BRANCH_MARKER = "*"


BRANCH_PREFIX = "refs/heads/"


def parse_ref_name(output: str) -> str:
    return output.strip()


def parse_symbolic_ref(output: str) -> str:
    """Branch name from ``git symbolic-ref HEAD`` output.

    The full ref is shortened by dropping ``refs/heads/`` only, so a tag
    with the same name never turns ``main`` into ``heads/main``.
    """
    ref = parse_ref_name(output)
    if ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX):]
    return ref


def is_detached(ref_name: str) -> bool:
    """True when an already-trimmed ref name is the detached-HEAD sentinel."""
    return ref_name == DETACHED_SENTINEL


def parse_file_list(output: str) -> list[str]:
    """Split ``ls-tree --name-only`` output into paths, keeping tool order.

    Blank entries (the one produced by the trailing newline) are dropped.
    """
    return [line for line in output.split("\n") if line]


def parse_branch_list(output: str) -> list[str]:
    """Turn ``git branch`` output into bare branch names.

    The current-branch marker is removed wherever it appears, surrounding
    whitespace is trimmed, blank lines are dropped and repeated names keep
    their first position.
    """
    branches: list[str] = []
    for line in output.split("\n"):
        name = line.replace(BRANCH_MARKER, "").strip()
        if name and name not in branches:
            branches.append(name)
    return branches


def parse_commit_log(output: str) -> list[CommitRecord]:
    """Parse ``git log --oneline`` output into commit records.

    The hash is everything before the first space; the rest of the line is
    the message, which may be empty.
    """
    output = output.strip()
    if not output:
        return []
    commits: list[CommitRecord] = []
    for line in output.split("\n"):
        hash_, _, message = line.partition(" ")
        if not hash_:
            continue
        commits.append(CommitRecord(hash=hash_, message=message))
    return commits

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RepositoryDescriptor:
    """Snapshot of one repository's metadata for a single request."""

    name: str  # directory name under the root
    head: str  # branch name, or full commit hash when detached
    files: list[str] | None = None  # only populated when requested


@dataclass(frozen=True)
class CommitRecord:
    """One line of ``git log --oneline``."""

    hash: str
    message: str

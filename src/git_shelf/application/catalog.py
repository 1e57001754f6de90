from __future__ import annotations

import logging
import os
from pathlib import Path

from git_shelf.application.use_cases import (
    list_branches,
    list_commits,
    list_files,
    resolve_reference,
)
from git_shelf.domain.errors import ShelfError
from git_shelf.domain.models import CommitRecord, RepositoryDescriptor
from git_shelf.domain.ports import ProcessRunner
from git_shelf.infrastructure.git_cli_runner import GitCliRunner

logger = logging.getLogger(__name__)

DEFAULT_ROOT_DIR = "/home/git"
ROOT_DIR_ENV = "GIT_SHELF_ROOT"


def default_root_dir() -> str:
    return os.environ.get(ROOT_DIR_ENV) or DEFAULT_ROOT_DIR


class RepositoryCatalog:
    """Repositories kept as subdirectories of one root directory.

    Nothing is cached: every call scans the root and asks git again.
    """

    def __init__(
        self,
        root_dir: str,
        runner: ProcessRunner | None = None,
        suffix: str = "",
    ) -> None:
        self._root = Path(root_dir)
        self._runner = runner if runner is not None else GitCliRunner()
        self._suffix = suffix

    @property
    def root_dir(self) -> str:
        return str(self._root)

    def repository_path(self, name: str) -> str:
        return str(self._root / name)

    def repository_names(self) -> list[str]:
        """Directory entries of the root, sorted by name; files are skipped."""
        with os.scandir(self._root) as entries:
            names = [
                entry.name
                for entry in entries
                if entry.is_dir() and entry.name.endswith(self._suffix)
            ]
        return sorted(names)

    def _exists(self, name: str) -> bool:
        if name not in self.repository_names():
            logger.debug("repository not found name=%s root=%s", name, self._root)
            return False
        return True

    def list_repositories(
        self, include_files: bool = False, skip_failures: bool = False
    ) -> list[RepositoryDescriptor]:
        """Describe every repository under the root.

        By default the first failing repository aborts the listing. With
        *skip_failures* it is logged and left out instead.
        """
        repos: list[RepositoryDescriptor] = []
        for name in self.repository_names():
            try:
                repos.append(self._describe(name, "", include_files))
            except ShelfError as e:
                if not skip_failures:
                    raise
                logger.warning("skipping repository name=%s: %s", name, e)
        return repos

    def get_repository(
        self, name: str, ref: str = "", include_files: bool = False
    ) -> RepositoryDescriptor | None:
        """Describe one repository, or return None when it does not exist."""
        if not self._exists(name):
            return None
        return self._describe(name, ref, include_files)

    def branches(self, name: str) -> list[str] | None:
        if not self._exists(name):
            return None
        return list_branches(self._runner, self.repository_path(name))

    def commits(self, name: str, ref: str = "") -> list[CommitRecord] | None:
        if not self._exists(name):
            return None
        return list_commits(self._runner, self.repository_path(name), ref)

    def _describe(self, name: str, ref: str, include_files: bool) -> RepositoryDescriptor:
        repo_path = self.repository_path(name)
        head = resolve_reference(self._runner, repo_path, ref)
        files = list_files(self._runner, repo_path, head) if include_files else None
        return RepositoryDescriptor(name=name, head=head, files=files)

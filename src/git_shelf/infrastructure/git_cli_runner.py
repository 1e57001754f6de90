import logging
import os
import subprocess
from pathlib import Path

from git_shelf.domain.errors import ProcessFailed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_REPOSITORY_ENV = frozenset({
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_COMMON_DIR",
    "GIT_NAMESPACE",
})


class GitCliRunner:
    """Runs the ``git`` executable, one process per call."""

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT, git: str = "git") -> None:
        self._timeout = timeout
        self._git = git

    def run(self, working_dir: str, *args: str) -> str:
        # Discovery stops at working_dir: a plain directory never resolves
        # to a repository that encloses it. Inherited repository overrides
        # (set inside git hooks, for one) would win over -C.
        env = {
            key: value
            for key, value in os.environ.items()
            if key not in _REPOSITORY_ENV
        }
        env["GIT_CEILING_DIRECTORIES"] = str(Path(working_dir).resolve().parent)
        try:
            result = subprocess.run(
                [self._git, "-C", working_dir, *args],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "git timed out after %ss repo_path=%s args=%s",
                self._timeout, working_dir, args,
            )
            raise ProcessFailed(
                working_dir, args, None, f"timed out after {self._timeout}s"
            )
        except OSError as e:
            logger.warning("git could not start repo_path=%s args=%s: %s", working_dir, args, e)
            raise ProcessFailed(working_dir, args, None, str(e)) from e

        if result.returncode != 0:
            output = result.stderr + result.stdout
            logger.warning(
                "git failed repo_path=%s args=%s returncode=%d output=%s",
                working_dir, args, result.returncode, output.strip(),
            )
            raise ProcessFailed(working_dir, args, result.returncode, output)
        return result.stdout

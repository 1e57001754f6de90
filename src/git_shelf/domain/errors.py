from __future__ import annotations


class ShelfError(Exception):
    """Base class for repository metadata failures."""


class ProcessFailed(ShelfError):
    """The git executable exited non-zero, timed out, or could not start."""

    def __init__(
        self,
        repo_path: str,
        git_args: tuple[str, ...],
        returncode: int | None,
        output: str,
    ) -> None:
        self.repo_path = repo_path
        self.git_args = tuple(git_args)
        self.returncode = returncode
        self.output = output  # stderr followed by stdout
        command = " ".join(("git", *self.git_args))
        detail = output.strip() or "no output"
        super().__init__(f"{command} failed in {repo_path}: {detail}")


class ResolutionFailed(ShelfError):
    """No head could be determined for a repository."""

    def __init__(self, repo_path: str, ref: str = "") -> None:
        self.repo_path = repo_path
        self.ref = ref
        context = f" (ref {ref!r})" if ref else ""
        super().__init__(f"Cannot resolve head of {repo_path}{context}")

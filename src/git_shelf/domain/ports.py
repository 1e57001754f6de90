from __future__ import annotations

from typing import Protocol


class ProcessRunner(Protocol):
    def run(self, working_dir: str, *args: str) -> str:
        """Run git with *args* against *working_dir* and return its stdout.

        Raises ProcessFailed on non-zero exit, timeout, or missing binary.
        """
        ...

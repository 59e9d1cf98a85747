"""Process runner for the GitHub CLI."""

from __future__ import annotations

import os
import subprocess
from typing import Protocol

from .errors import GhCommandError


class CommandRunner(Protocol):
    def run(self, args: list[str]) -> str: ...


class GhRunner:
    """Runs ``gh`` with the given arguments and returns its stdout.

    Authentication is left to gh itself, so the current environment is
    passed through unchanged.
    """

    def __init__(self, binary: str = "gh") -> None:
        self.binary = binary

    def run(self, args: list[str]) -> str:
        cmd = [self.binary, *args]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                env=os.environ.copy(),
                check=False,
            )
        except OSError as exc:
            raise GhCommandError(cmd, str(exc)) from exc

        # gh writes UTF-8 whatever the locale says.
        stdout = proc.stdout.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            detail = (
                proc.stderr.decode("utf-8", errors="replace").strip()
                or stdout.strip()
                or f"exit status {proc.returncode}"
            )
            raise GhCommandError(cmd, detail)
        return stdout

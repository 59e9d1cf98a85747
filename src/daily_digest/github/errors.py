"""Errors raised while talking to the GitHub CLI."""

from __future__ import annotations


class GhError(Exception):
    """Base class for failures of a single gh query."""


class GhCommandError(GhError):
    """gh could not be started or exited with a non-zero status."""

    def __init__(self, args: list[str], detail: str) -> None:
        self.command = list(args)
        self.detail = detail
        super().__init__(f"{' '.join(self.command)}: {detail}")


class GhParseError(GhError):
    """gh succeeded but its output was not the JSON we expected."""

"""Startup-time error types.

The interactive core never raises for empty results; these only surface at
the CLI seams (terminal attach, explicit git mode outside a repository).
"""

from __future__ import annotations

from os import PathLike


class FuzzfishError(Exception):
    """Base class for errors that abort startup."""


class TerminalUnavailableError(FuzzfishError):
    """Raised when no interactive terminal can be attached."""


class NotAGitRepositoryError(FuzzfishError):
    """Raised when git mode is requested explicitly outside a repository."""

    def __init__(self, path: str | PathLike[str]) -> None:
        super().__init__(f"not a git repository: {path}")
        self.path = path

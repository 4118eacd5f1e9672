"""Exception hierarchy for psync."""

from __future__ import annotations


class PsyncError(Exception):
    """Base exception for all psync errors."""


class UsageError(PsyncError):
    """Wrong number of positional arguments for a verb."""


class MissingDirectoryError(PsyncError):
    """A required source or destination directory is absent."""

    def __init__(self, side: str, path: str | None = None, reason: str | None = None) -> None:
        self.side = side
        self.path = path
        if reason:
            message = f"cannot create {side} directory {path}: {reason}"
        elif path:
            message = f"{side} directory does not exist: {path}"
        else:
            message = f"no {side} directory given and none configured"
        super().__init__(message)


class NotARepositoryError(PsyncError):
    """The source root is not inside a git working tree."""


class MirrorError(PsyncError):
    """The rsync transfer could not be started or did not succeed."""

"""Exception hierarchy for LockGuard."""

from pathlib import Path
from typing import Optional


class LockGuardError(Exception):
    """Base class for all LockGuard errors."""


class UsageError(LockGuardError):
    """Bad invocation detected before any scanning starts."""


class WatchlistNotFoundError(UsageError):
    """A user-supplied watchlist file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"List file not found: {path}")


class LockfileParseError(LockGuardError):
    """A lockfile's content does not match its dialect.

    Raised per file. The scan records the file as failed instead of
    reporting it clean.
    """

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = path
        self.reason = reason
        location = str(path) if path else "<lockfile>"
        super().__init__(f"Could not parse {location}: {reason}")


class ExtractorUnavailableError(LockGuardError):
    """No extractor is registered for a lockfile name."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No extractor available for {path.name}")


class RemediationError(LockGuardError):
    """A package manager reinstall failed in an affected directory."""

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f"Remediation failed in {directory}: {reason}")

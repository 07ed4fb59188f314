"""Watchlist matching and classification for a single lockfile."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from packaging.version import InvalidVersion, Version

from ..utils.logging import get_logger
from .parsers import LockfileIndex
from .watchlist import WatchlistEntry

VERSION_UNKNOWN = "(version unknown)"


class MatchKind(str, Enum):
    """Outcome of checking one watchlist entry against one lockfile."""

    EXACT = "exact"
    MISMATCH = "mismatch"
    ABSENT = "absent"


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Order versions by precedence, falling back to plain string order.

    Args:
        versions: Version strings

    Returns:
        Sorted, deduplicated list
    """
    unique = set(versions)
    try:
        return sorted(unique, key=Version)
    except InvalidVersion:
        return sorted(unique)


@dataclass
class Classification:
    """Classification of one watchlist entry against one lockfile."""

    entry: WatchlistEntry
    kind: MatchKind
    found_versions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate classification data."""
        if self.kind is MatchKind.EXACT and self.entry.version not in self.found_versions:
            raise ValueError("Exact match must include the compromised version")
        if self.kind is MatchKind.ABSENT and self.found_versions:
            raise ValueError("Absent classification cannot carry versions")

    @property
    def is_hit(self) -> bool:
        """Whether this result flags the lockfile."""
        return self.kind is not MatchKind.ABSENT

    @property
    def found_display(self) -> str:
        """Comma-joined found versions, or the unknown-version marker."""
        return ",".join(self.found_versions) if self.found_versions else VERSION_UNKNOWN


def classify(index: LockfileIndex, entry: WatchlistEntry) -> Classification:
    """Classify a watchlist entry against a lockfile index.

    An exact match wins over any other versions of the same package, so an
    entry never yields both an exact match and a warning.

    Args:
        index: Lockfile index to query
        entry: Watchlist entry

    Returns:
        Exactly one classification
    """
    versions = index.versions_for(entry.name)

    if versions is None:
        return Classification(entry=entry, kind=MatchKind.ABSENT)

    found = tuple(sort_versions(versions))
    if entry.version in versions:
        return Classification(entry=entry, kind=MatchKind.EXACT, found_versions=found)

    return Classification(entry=entry, kind=MatchKind.MISMATCH, found_versions=found)


class WatchlistMatcher:
    """Matches a watchlist against lockfile indices."""

    def __init__(self, watchlist: Iterable[WatchlistEntry]) -> None:
        """Initialize the matcher.

        Args:
            watchlist: Entries to look for
        """
        self.watchlist = tuple(watchlist)
        self.logger = get_logger("WatchlistMatcher")

    def match(self, index: LockfileIndex) -> List[Classification]:
        """Classify every watchlist entry against one lockfile.

        Args:
            index: Lockfile index

        Returns:
            One classification per watchlist entry, in watchlist order
        """
        results = []
        for entry in self.watchlist:
            result = classify(index, entry)
            if result.is_hit:
                self.logger.debug(f"{result.kind.value.upper()}: {entry} (found {result.found_display})")
            results.append(result)
        return results

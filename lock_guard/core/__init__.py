"""Lockfile extraction and watchlist matching for LockGuard."""

from .aggregator import FileOutcome, ScanState
from .matcher import Classification, MatchKind, WatchlistMatcher, classify
from .parsers import LockfileIndex, LockfileParser
from .scanner import LockfileScanner
from .watchlist import WatchlistEntry, load_watchlist, parse_watchlist

__all__ = [
    "Classification",
    "FileOutcome",
    "LockfileIndex",
    "LockfileParser",
    "LockfileScanner",
    "MatchKind",
    "ScanState",
    "WatchlistEntry",
    "WatchlistMatcher",
    "classify",
    "load_watchlist",
    "parse_watchlist",
]

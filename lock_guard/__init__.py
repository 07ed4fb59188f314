"""LockGuard - scan npm, yarn and pnpm lockfiles for known-compromised package versions."""

__version__ = "0.1.0"

from .core.matcher import Classification, MatchKind, WatchlistMatcher
from .core.parsers import LockfileParser
from .core.scanner import LockfileScanner
from .core.watchlist import WatchlistEntry, load_watchlist
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "Classification",
    "MatchKind",
    "WatchlistMatcher",
    "LockfileParser",
    "LockfileScanner",
    "WatchlistEntry",
    "load_watchlist",
    "ConsoleFormatter",
    "JSONFormatter",
]

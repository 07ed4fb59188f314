"""Watchlist of compromised package versions."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..errors import WatchlistNotFoundError
from ..utils.logging import get_logger

logger = get_logger("watchlist")


# Packages hijacked in the September 2025 npm account takeover.
DEFAULT_WATCHLIST_TEXT = """\
ansi-regex@6.2.1
ansi-styles@6.2.2
backslash@0.2.1
chalk@5.6.1
chalk-template@1.1.1
color-convert@3.1.1
color-name@2.0.1
color-string@2.1.1
debug@4.4.2
error-ex@1.3.3
has-ansi@6.0.1
is-arrayish@0.3.3
simple-swizzle@0.2.3
slice-ansi@7.1.1
strip-ansi@7.1.1
supports-color@10.2.1
supports-hyperlinks@4.1.1
wrap-ansi@9.0.1
"""


@dataclass(frozen=True, order=True)
class WatchlistEntry:
    """A package name paired with one known-compromised version."""

    name: str
    version: str

    def __post_init__(self) -> None:
        """Validate the entry."""
        if not self.name or not self.version:
            raise ValueError("Watchlist entry needs both a name and a version")
        if "@" in self.version or "@" in self.name[1:]:
            raise ValueError(f"Unexpected '@' in watchlist entry: {self.name}@{self.version}")

    @classmethod
    def parse(cls, item: str) -> Optional["WatchlistEntry"]:
        """Parse a ``name@version`` string.

        The string is split on its last ``@`` so scoped names such as
        ``@scope/pkg@1.0.0`` keep their leading scope marker.

        Args:
            item: Raw watchlist line

        Returns:
            Parsed entry, or None if the line is malformed
        """
        name, sep, version = item.strip().rpartition("@")
        if not sep:
            return None
        try:
            return cls(name=name.strip(), version=version.strip())
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


Watchlist = Tuple[WatchlistEntry, ...]


def parse_watchlist(lines: Iterable[str]) -> Watchlist:
    """Parse watchlist lines into a sorted, deduplicated watchlist.

    Blank lines and ``#`` comments are ignored. Malformed lines are dropped.

    Args:
        lines: Raw lines, e.g. from ``str.splitlines()``

    Returns:
        Sorted tuple of unique entries
    """
    entries = set()
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entry = WatchlistEntry.parse(line)
        if entry is None:
            logger.debug(f"Skipping malformed watchlist entry: {line!r}")
            continue
        entries.add(entry)
    return tuple(sorted(entries))


def load_watchlist(path: Optional[Path] = None) -> Watchlist:
    """Load the watchlist from a file, or the embedded default list.

    Args:
        path: Optional user-supplied list file

    Returns:
        Sorted tuple of unique entries

    Raises:
        WatchlistNotFoundError: If ``path`` is given but is not a file
    """
    if path is None:
        return parse_watchlist(DEFAULT_WATCHLIST_TEXT.splitlines())

    if not path.is_file():
        raise WatchlistNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        watchlist = parse_watchlist(f)

    logger.debug(f"Loaded {len(watchlist)} watchlist entries from {path}")
    return watchlist

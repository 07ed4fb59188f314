"""Scan configuration for LockGuard."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .errors import UsageError, WatchlistNotFoundError

DEFAULT_DIST_DIR = Path("dist")


@dataclass
class ScanConfig:
    """Options controlling a single scan run."""

    root: Path = Path(".")
    watchlist_path: Optional[Path] = None
    fix: bool = False
    print_overrides: bool = False
    scan_dist: bool = False
    dist_dir: Path = DEFAULT_DIST_DIR
    ignore_patterns: List[str] = field(default_factory=list)
    output: Optional[Path] = None
    jobs: int = 1
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration.

        Raises:
            UsageError: On any invalid option
        """
        if not self.root.exists():
            raise UsageError(f"Path does not exist: {self.root}")

        if self.watchlist_path is not None and not self.watchlist_path.is_file():
            raise WatchlistNotFoundError(self.watchlist_path)

        if self.jobs < 1:
            raise UsageError(f"--jobs must be at least 1, got {self.jobs}")

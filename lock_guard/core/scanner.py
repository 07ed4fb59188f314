"""Scan loop tying extraction, matching and aggregation together."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..errors import ExtractorUnavailableError, LockfileParseError
from ..utils.logging import get_logger
from .aggregator import FileOutcome, ScanState
from .matcher import WatchlistMatcher
from .parsers import ParserRegistry, registry as default_registry
from .watchlist import Watchlist

OutcomeCallback = Callable[[FileOutcome], None]


class LockfileScanner:
    """Scans lockfiles for watchlisted package versions."""

    def __init__(self, watchlist: Watchlist, registry: Optional[ParserRegistry] = None) -> None:
        """Initialize the scanner.

        Args:
            watchlist: Entries to look for
            registry: Extractor registry (defaults to the built-in one)
        """
        self.matcher = WatchlistMatcher(watchlist)
        self.registry = registry or default_registry
        self.logger = get_logger("LockfileScanner")

    def scan_file(self, path: Path) -> FileOutcome:
        """Extract and classify one lockfile.

        Parse failures are captured on the outcome, so one bad file never
        aborts the scan.

        Args:
            path: Lockfile path

        Returns:
            Outcome for this file
        """
        dialect = self.registry.dialect_for_file(path) or "unknown"
        outcome = FileOutcome(path=path, dialect=dialect)

        try:
            index = self.registry.parse_file(path)
        except (LockfileParseError, ExtractorUnavailableError) as e:
            self.logger.error(str(e))
            outcome.error = str(e)
            return outcome
        except OSError as e:
            self.logger.error(f"Could not read {path}: {e}")
            outcome.error = f"Could not read {path}: {e}"
            return outcome

        outcome.results = self.matcher.match(index)
        self.logger.debug(f"{path}: {len(outcome.hits)} hit(s)")
        return outcome

    def scan(
        self,
        paths: Iterable[Path],
        jobs: int = 1,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> ScanState:
        """Scan lockfiles in order and fold their outcomes.

        Args:
            paths: Lockfile paths in discovery order
            jobs: Worker threads for extraction; 1 scans sequentially
            on_outcome: Called with each outcome, in discovery order

        Returns:
            Accumulated scan state
        """
        state = ScanState()
        paths = list(paths)

        if jobs > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                outcomes = executor.map(self.scan_file, paths)
                for outcome in outcomes:
                    self._fold(state, outcome, on_outcome)
        else:
            for path in paths:
                self._fold(state, self.scan_file(path), on_outcome)

        return state

    def _fold(self, state: ScanState, outcome: FileOutcome, on_outcome: Optional[OutcomeCallback]) -> None:
        state.record(outcome)
        if on_outcome is not None:
            on_outcome(outcome)

"""Accumulation of per-lockfile outcomes into the overall scan state."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from .matcher import Classification, MatchKind

EXIT_CLEAN = 0
EXIT_INCOMPLETE = 1
EXIT_USAGE = 2
EXIT_WARNINGS = 8
EXIT_COMPROMISED = 10


@dataclass
class FileOutcome:
    """Result of scanning a single lockfile."""

    path: Path
    dialect: str
    results: List[Classification] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def hits(self) -> List[Classification]:
        """Exact matches and warnings only."""
        return [result for result in self.results if result.is_hit]

    @property
    def exact_hit(self) -> bool:
        return any(result.kind is MatchKind.EXACT for result in self.results)

    @property
    def warn_hit(self) -> bool:
        return any(result.kind is MatchKind.MISMATCH for result in self.results)

    @property
    def flagged(self) -> bool:
        return self.exact_hit or self.warn_hit

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def directory(self) -> Path:
        """Absolute directory containing the lockfile."""
        return self.path.parent.resolve()


@dataclass
class ScanState:
    """Scan-wide flags and affected directories.

    ``found_any`` and ``warn_any`` only ever go from False to True.
    """

    found_any: bool = False
    warn_any: bool = False
    affected_dirs: Set[Path] = field(default_factory=set)
    failed_files: List[Path] = field(default_factory=list)
    outcomes: List[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        """Fold one lockfile outcome into the state.

        Args:
            outcome: Outcome of a scanned lockfile
        """
        self.outcomes.append(outcome)

        if outcome.failed:
            self.failed_files.append(outcome.path)
            return

        if outcome.exact_hit:
            self.found_any = True
        if outcome.warn_hit:
            self.warn_any = True
        if outcome.flagged:
            self.affected_dirs.add(outcome.directory)

    @property
    def sorted_affected_dirs(self) -> List[Path]:
        return sorted(self.affected_dirs)

    @property
    def files_scanned(self) -> int:
        return len(self.outcomes)

    @property
    def exit_code(self) -> int:
        """Severity exit code: exact > warnings > incomplete > clean."""
        if self.found_any:
            return EXIT_COMPROMISED
        if self.warn_any:
            return EXIT_WARNINGS
        if self.failed_files:
            return EXIT_INCOMPLETE
        return EXIT_CLEAN

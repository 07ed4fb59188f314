"""Output formatters for LockGuard results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console

from ..core.aggregator import FileOutcome, ScanState
from ..core.matcher import Classification, MatchKind
from ..core.watchlist import Watchlist, WatchlistEntry
from ..heuristics.bundle_scan import BundleHit
from ..utils.logging import get_logger

RULE = "-" * 40


class ConsoleFormatter:
    """Console formatter printing scan events line by line."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console(highlight=False)
        self.logger = get_logger("ConsoleFormatter")

    def log(self, message: str, style: Optional[str] = None) -> None:
        """Print one plain line (no markup interpretation)."""
        self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def hr(self) -> None:
        self.log(RULE)

    def format_scan_start(self, root: Path) -> None:
        self.log(f"🔍 Scanning for lockfiles under: {root}")

    def format_no_lockfiles(self, print_overrides: bool, scan_dist: bool) -> None:
        """Report that discovery found nothing.

        Args:
            print_overrides: Whether override blocks will still be printed
            scan_dist: Whether the bundle scan will still run
        """
        self.log("❌ No lockfiles found.", style="yellow")
        if print_overrides:
            self.log("Note: You can still use --print-overrides to output blocks.")
        if scan_dist:
            self.hr()
            self.log("🔎 Running heuristic bundle scan (no lockfiles found)…")

    def format_result(self, result: Classification) -> None:
        """Render one exact match or warning.

        Args:
            result: Classification with a hit
        """
        entry = result.entry
        if result.kind is MatchKind.EXACT:
            self.log(f"🚨 Found compromised version: {entry}", style="red bold")
        elif result.kind is MatchKind.MISMATCH:
            self.log(
                f"⚠️  WARNING: {entry.name} present in lockfile, but not at known compromised "
                f"version ({entry.version}). Found versions: {result.found_display}",
                style="yellow",
            )

    def format_outcome(self, outcome: FileOutcome) -> None:
        """Render every event for one lockfile.

        Args:
            outcome: Scanned lockfile outcome
        """
        self.hr()
        self.log(f"Lockfile: {outcome.path}")

        if outcome.failed:
            self.log(f"❌ {outcome.error}", style="red")
            self.log("   Versions could not be determined; review this lockfile manually.")
            return

        for result in outcome.hits:
            self.format_result(result)

        if not outcome.flagged:
            self.log("✅ No hits for this lockfile.", style="green")

    def format_scan_summary(self, state: ScanState, scan_time: Optional[float] = None) -> None:
        """Render the overall verdict.

        Args:
            state: Accumulated scan state
            scan_time: Scan duration in seconds
        """
        self.hr()
        if state.found_any:
            self.log("🚨 Exact compromised version(s) detected.", style="red bold")
        elif state.warn_any:
            self.log("⚠️  Packages of interest present, but versions differ. Please review.", style="yellow")
        elif state.failed_files:
            self.log("❌ No hits, but some lockfiles could not be parsed:", style="red")
        else:
            self.log("✅ No compromised packages detected across lockfiles.", style="green")

        if state.failed_files and (state.found_any or state.warn_any):
            self.log("❌ Some lockfiles could not be parsed:", style="red")
        for path in state.failed_files:
            self.log(f"   • {path}")

        if state.affected_dirs:
            self.log("Affected directories:")
            for directory in state.sorted_affected_dirs:
                self.log(f"   • {directory}")

        if scan_time is not None:
            self.log(f"Scanned {state.files_scanned} lockfile(s) in {scan_time:.2f}s", style="dim")

    def format_overrides(self, watchlist: Watchlist) -> None:
        """Render override blocks for the watchlist.

        Args:
            watchlist: Entries to block
        """
        overrides = OverridesFormatter(watchlist)
        self.hr()
        self.log("📎 Paste into your package.json to block these exact compromised versions:")
        self.hr()
        self.log('npm / pnpm ("overrides")')
        self.log(overrides.npm_overrides())
        self.hr()
        self.log('yarn ("resolutions"): replace <SAFE_VERSION_BELOW> with a known-good version lower than the compromised one:')
        self.log(overrides.yarn_resolutions())
        self.hr()

    def format_bundle_scan(self, dist_dir: Path, hits: Optional[List[BundleHit]]) -> None:
        """Render the heuristic bundle scan.

        Args:
            dist_dir: Directory that was scanned
            hits: Matching lines, or None if the directory does not exist
        """
        self.hr()
        self.log(f"🔎 Heuristic scan of built assets (directory: {dist_dir})")
        self.log("   Looking for patched network/wallet hooks typical of the payload…")
        self.log("   (heuristic only; any hits deserve manual review)")
        self.hr()
        if hits is None:
            self.log(f"ℹ️  Directory not found: {dist_dir} (skipping heuristic scan)")
        else:
            for hit in hits:
                self.log(str(hit))
        self.hr()


class OverridesFormatter:
    """Renders the watchlist as package.json override blocks."""

    def __init__(self, watchlist: Watchlist) -> None:
        self.watchlist = watchlist

    def npm_overrides(self) -> str:
        """npm / pnpm ``overrides`` forcing versions below the compromised one."""
        return self._block("overrides", self._values(lambda entry: f"<{entry.version}"))

    def yarn_resolutions(self) -> str:
        """yarn ``resolutions`` with a placeholder for a safe version."""
        return self._block("resolutions", self._values(lambda entry: f"<SAFE_VERSION_BELOW_{entry.version}>"))

    def _values(self, render: Callable[[WatchlistEntry], str]) -> Dict[str, str]:
        # One key per package; the first watchlist entry wins
        values: Dict[str, str] = {}
        for entry in self.watchlist:
            values.setdefault(entry.name, render(entry))
        return values

    @staticmethod
    def _block(key: str, values: Dict[str, str]) -> str:
        lines = [f'    {json.dumps(name)}: {json.dumps(value)}' for name, value in values.items()]
        return f'  "{key}": {{\n' + ",\n".join(lines) + "\n  }"


class JSONFormatter:
    """JSON formatter for LockGuard results."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_results(
        self,
        state: ScanState,
        watchlist: Watchlist,
        scan_time: float
    ) -> Dict[str, Any]:
        """Format scan results as JSON-serialisable data.

        Args:
            state: Accumulated scan state
            watchlist: Watchlist the scan used
            scan_time: Scan duration in seconds

        Returns:
            Results dictionary
        """
        return {
            "scan_info": {
                "timestamp": datetime.now().isoformat(),
                "scan_time": round(scan_time, 3),
                "lockfiles_scanned": state.files_scanned,
            },
            "watchlist": [str(entry) for entry in watchlist],
            "summary": {
                "found_any": state.found_any,
                "warn_any": state.warn_any,
                "exit_code": state.exit_code,
                "affected_dirs": [str(d) for d in state.sorted_affected_dirs],
                "failed_files": [str(p) for p in state.failed_files],
            },
            "lockfiles": [self._format_outcome(outcome) for outcome in state.outcomes],
        }

    def _format_outcome(self, outcome: FileOutcome) -> Dict[str, Any]:
        return {
            "path": str(outcome.path),
            "dialect": outcome.dialect,
            "flagged": outcome.flagged,
            "error": outcome.error,
            "results": [
                {
                    "package": result.entry.name,
                    "compromised_version": result.entry.version,
                    "classification": result.kind.value,
                    "found_versions": list(result.found_versions),
                }
                for result in outcome.hits
            ],
        }

    def save_results(self, results: Dict[str, Any]) -> None:
        """Save results to the output file.

        Args:
            results: Results dictionary to save
        """
        if not self.output_file:
            return

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, "w", encoding="utf-8") as f:
            json.dump(results, f, indent=2)

        self.logger.info(f"Results saved to {self.output_file}")

"""Main CLI interface for LockGuard."""

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ScanConfig
from ..core.aggregator import EXIT_USAGE, ScanState
from ..core.parsers import LockfileParser
from ..core.scanner import LockfileScanner
from ..core.watchlist import Watchlist, load_watchlist
from ..errors import UsageError
from ..heuristics.bundle_scan import scan_bundle_dir
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..remediation.fixer import NEXT_STEPS, Remediator
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import find_lockfiles

app = typer.Typer(
    name="lockguard",
    help="Scan npm, yarn and pnpm lockfiles for known-compromised package versions",
    add_completion=False
)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger("CLI")


def _usage_error(error: UsageError) -> typer.Exit:
    err_console.print(f"Error: {error}", style="red", markup=False)
    return typer.Exit(EXIT_USAGE)


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Directory (or single lockfile) to scan"
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Clean & reinstall affected projects with lifecycle scripts disabled"
    ),
    print_overrides: bool = typer.Option(
        False,
        "--print-overrides",
        help="Print npm/pnpm overrides and yarn resolutions blocking the watchlist"
    ),
    list_file: Optional[Path] = typer.Option(
        None,
        "--list",
        "-l",
        help="Watchlist file with one name@version per line (default: embedded list)"
    ),
    scan_dist: bool = typer.Option(
        False,
        "--scan-dist",
        help="Heuristically scan built bundles for payload hooks"
    ),
    dist_dir: Path = typer.Option(
        Path("dist"),
        "--dist-dir",
        help="Built assets directory for --scan-dist"
    ),
    ignore_patterns: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        help="Additional ignore patterns"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    jobs: int = typer.Option(
        1,
        "--jobs",
        "-j",
        help="Lockfiles to parse in parallel"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Scan lockfiles for compromised package versions.

    Exit codes: 0 clean, 8 warnings only, 10 compromised versions found,
    1 lockfiles could not be parsed, 2 bad usage.
    """
    setup_logging(verbose=verbose)

    try:
        config = ScanConfig(
            root=path,
            watchlist_path=list_file,
            fix=fix,
            print_overrides=print_overrides,
            scan_dist=scan_dist,
            dist_dir=dist_dir,
            ignore_patterns=list(ignore_patterns or []),
            output=output,
            jobs=jobs,
            verbose=verbose,
        )
        watchlist = load_watchlist(config.watchlist_path)
    except UsageError as e:
        raise _usage_error(e)

    formatter = ConsoleFormatter(console)
    formatter.format_scan_start(config.root)

    lockfiles = find_lockfiles(config.root, config.ignore_patterns)
    logger.debug(f"Found {len(lockfiles)} lockfile(s), {len(watchlist)} watchlist entries")

    start_time = time.perf_counter()
    if lockfiles:
        scanner = LockfileScanner(watchlist)
        state = scanner.scan(
            [ref.path for ref in lockfiles],
            jobs=config.jobs,
            on_outcome=formatter.format_outcome,
        )
        formatter.format_scan_summary(state, time.perf_counter() - start_time)
    else:
        state = ScanState()
        formatter.format_no_lockfiles(config.print_overrides, config.scan_dist)
    scan_time = time.perf_counter() - start_time

    if config.fix and state.found_any:
        _remediate(formatter, state)

    if config.print_overrides:
        formatter.format_overrides(watchlist)

    if config.scan_dist:
        hits = scan_bundle_dir(config.dist_dir) if config.dist_dir.is_dir() else None
        formatter.format_bundle_scan(config.dist_dir, hits)

    if config.output:
        json_formatter = JSONFormatter(config.output)
        json_formatter.save_results(json_formatter.format_scan_results(state, watchlist, scan_time))

    raise typer.Exit(state.exit_code)


def _remediate(formatter: ConsoleFormatter, state: ScanState) -> None:
    """Reinstall every affected directory with scripts disabled.

    Args:
        formatter: Console formatter for progress output
        state: Scan state holding the affected directories
    """
    formatter.hr()
    formatter.log("🛠  Remediation: cleaning & reinstalling with scripts disabled per affected directory…")
    formatter.hr()

    failed = Remediator(formatter.console).fix_all(state.sorted_affected_dirs)

    formatter.hr()
    if failed:
        formatter.log(f"Remediation finished with {len(failed)} failure(s).", style="red")
    else:
        formatter.log("Remediation complete.")
    formatter.log("Next steps:")
    for step in NEXT_STEPS:
        formatter.log(f"  • {step}")


@app.command()
def overrides(
    list_file: Optional[Path] = typer.Option(
        None,
        "--list",
        "-l",
        help="Watchlist file with one name@version per line (default: embedded list)"
    )
) -> None:
    """Print override blocks for the watchlist without scanning."""
    try:
        watchlist: Watchlist = load_watchlist(list_file)
    except UsageError as e:
        raise _usage_error(e)

    ConsoleFormatter(console).format_overrides(watchlist)


@app.command()
def info(
    list_file: Optional[Path] = typer.Option(
        None,
        "--list",
        "-l",
        help="Watchlist file with one name@version per line (default: embedded list)"
    )
) -> None:
    """Show supported lockfiles and the active watchlist."""
    try:
        watchlist = load_watchlist(list_file)
    except UsageError as e:
        raise _usage_error(e)

    console.print(Panel.fit(
        "[bold blue]LockGuard[/bold blue]\n"
        "Detects known-compromised npm package versions in lockfiles",
        title="Information"
    ))

    dialects = LockfileParser.get_supported_dialects()
    console.print(f"\n[bold]Supported dialects:[/bold] {', '.join(dialects)}")
    filenames = LockfileParser.get_supported_filenames()
    console.print(f"[bold]Lockfile names:[/bold] {', '.join(filenames)}")

    console.print(f"[bold]Watchlist ({len(watchlist)} entries):[/bold]")
    for entry in watchlist:
        console.print(f"  • {entry}", markup=False)


def main() -> None:
    """Main entry point for LockGuard CLI."""
    app()


if __name__ == "__main__":
    main()

"""Heuristic scan of built bundles for wallet-hijacking payload hooks."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

PAYLOAD_PATTERN: re.Pattern = re.compile(
    r"(window\.ethereum\.request|XMLHttpRequest|fetch\(|Solana|tron|Bitcoin Cash|Litecoin)"
)


@dataclass
class BundleHit:
    """A line in a built asset matching the payload pattern."""

    path: Path
    line_number: int
    text: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line_number}:{self.text}"


def _iter_files(directory: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames.sort()
        for filename in sorted(filenames):
            yield Path(dirpath, filename)


def scan_bundle_dir(directory: Path, pattern: re.Pattern = PAYLOAD_PATTERN, max_line: int = 200) -> List[BundleHit]:
    """Grep every file under ``directory`` for the payload pattern.

    Minified bundles put everything on one line, so the reported text is
    cut down to a window around the first match.

    Args:
        directory: Built assets directory
        pattern: Pattern to look for
        max_line: Maximum length of reported text

    Returns:
        Hits, in path order
    """
    hits = []
    for file_path in _iter_files(directory):
        try:
            with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
                for line_number, line in enumerate(f, 1):
                    match = pattern.search(line)
                    if not match:
                        continue
                    text = line.rstrip("\n")
                    if len(text) > max_line:
                        start = max(match.start() - max_line // 2, 0)
                        text = text[start:start + max_line]
                    hits.append(BundleHit(path=file_path, line_number=line_number, text=text))
        except OSError:
            # Skip unreadable files
            continue
    return hits

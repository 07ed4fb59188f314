"""Path utilities for locating lockfiles and filtering paths."""

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..errors import UsageError


# Lockfile name -> dialect
LOCKFILE_DIALECTS: Dict[str, str] = {
    "package-lock.json": "npm",
    "npm-shrinkwrap.json": "npm",
    "yarn.lock": "yarn",
    "pnpm-lock.yaml": "pnpm",
    "pnpm-lock.yml": "pnpm",
}

DEFAULT_SKIP_DIRS = ("node_modules", ".git")


@dataclass
class LockfileRef:
    """A discovered lockfile tagged with its dialect."""

    path: Path
    dialect: str


class PathFilter:
    """Filters paths based on glob patterns."""

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            ignore_patterns: Glob patterns matched against the POSIX path
        """
        self.ignore_patterns = list(ignore_patterns or [])

    def is_ignored(self, path: Path) -> bool:
        """Check if a path should be ignored.

        Args:
            path: Path to check

        Returns:
            True if path matches any ignore pattern
        """
        path_str = path.as_posix()
        return any(
            fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path.name, pattern)
            for pattern in self.ignore_patterns
        )


class LockfileFinder:
    """Finds lockfiles in a project directory tree."""

    def __init__(
        self,
        ignore_patterns: Optional[List[str]] = None,
        skip_dirs: Optional[List[str]] = None
    ) -> None:
        """Initialize lockfile finder.

        Args:
            ignore_patterns: Additional ignore patterns
            skip_dirs: Directory names never descended into
        """
        self.path_filter = PathFilter(ignore_patterns)
        self.skip_dirs = set(DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs)

    def find_lockfiles(self, root_path: Path) -> List[LockfileRef]:
        """Find all lockfiles under a directory, sorted by path.

        Args:
            root_path: Root directory to search

        Returns:
            List of found lockfiles

        Raises:
            UsageError: If the root path does not exist
        """
        if not root_path.exists():
            raise UsageError(f"Path does not exist: {root_path}")

        if root_path.is_file():
            dialect = LOCKFILE_DIALECTS.get(root_path.name)
            return [LockfileRef(path=root_path, dialect=dialect)] if dialect else []

        found = [
            LockfileRef(path=file_path, dialect=LOCKFILE_DIALECTS[file_path.name])
            for file_path in self._walk_files(root_path)
            if file_path.name in LOCKFILE_DIALECTS
        ]
        return sorted(found, key=lambda ref: ref.path.as_posix())

    def _walk_files(self, root_path: Path) -> Iterator[Path]:
        """Walk files below ``root_path``, pruning skipped directories.

        Args:
            root_path: Root directory to walk

        Yields:
            File paths that are not ignored
        """
        for dirpath, dirnames, filenames in os.walk(root_path):
            dirnames[:] = [
                d for d in dirnames
                if d not in self.skip_dirs and not self.path_filter.is_ignored(Path(dirpath, d))
            ]
            for filename in filenames:
                file_path = Path(dirpath, filename)
                if not self.path_filter.is_ignored(file_path):
                    yield file_path


def find_lockfiles(
    root_path: Path,
    ignore_patterns: Optional[List[str]] = None
) -> List[LockfileRef]:
    """Convenience function to find lockfiles.

    Args:
        root_path: Root directory to search
        ignore_patterns: Additional ignore patterns

    Returns:
        List of found lockfiles
    """
    finder = LockfileFinder(ignore_patterns)
    return finder.find_lockfiles(root_path)

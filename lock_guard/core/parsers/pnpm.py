"""pnpm-lock.yaml extractor."""

import re
from pathlib import Path
from typing import Optional, Set

from .base import BaseExtractor, QueryIndex


def package_key_pattern(name: str) -> re.Pattern:
    """Compile the mapping-key pattern for one package name.

    Matches ``/name@1.2.3:`` (lockfile v5/v6) and ``name@1.2.3:`` (v9), with
    optional quoting and a trailing ``(peer@x)`` suffix. The key has to
    start the line so ``/@scope/color@1.0.0:`` is not taken for ``color``.

    Args:
        name: Package name

    Returns:
        Pattern capturing the version in group 1
    """
    return re.compile(
        r"""^\s*['"]?/?""" + re.escape(name) + r"""@([^:()'"\s]+)(?:\([^)]*\))*['"]?:"""
    )


class PnpmLockIndex(QueryIndex):
    """Name-by-name view over pnpm lockfile package keys."""

    dialect = "pnpm"

    def _scan(self, name: str) -> Set[str]:
        pattern = package_key_pattern(name)
        versions: Set[str] = set()
        for line in self.lines:
            match = pattern.match(line)
            if match:
                versions.add(match.group(1))
        return versions


class PnpmLockExtractor(BaseExtractor):
    """Extractor for pnpm-lock.yaml files."""

    def __init__(self) -> None:
        """Initialize the pnpm lockfile extractor."""
        super().__init__()
        self.dialect = "pnpm"
        self.filenames = ["pnpm-lock.yaml", "pnpm-lock.yml"]

    def extract(self, content: str, source: Optional[Path] = None) -> PnpmLockIndex:
        return PnpmLockIndex(content)

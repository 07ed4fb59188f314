"""yarn.lock extractor (classic v1 and berry)."""

import re
from pathlib import Path
from typing import List, Optional, Set

from .base import BaseExtractor, QueryIndex

HEADER_PATTERN = re.compile(r'^[^\s#].*:\s*$')
# classic: `  version "5.6.1"`, berry: `  version: 5.6.1`
VERSION_PATTERN = re.compile(r'^\s+version(?:\s+"([^"]+)"|:\s*"?([^"\s]+)"?)\s*$')


def descriptor_pattern(name: str) -> re.Pattern:
    """Match descriptors resolving to ``name``, directly or through an npm alias.

    Both ``chalk@^5.0.0`` and ``chalk-cjs@npm:chalk@^5.0.0`` match ``chalk``;
    ``supports-chalk@^1.0.0`` does not.

    Args:
        name: Package name

    Returns:
        Compiled descriptor pattern
    """
    return re.compile(rf"^(?:(?:@[^/@]+/)?[^@/]+@npm:)?{re.escape(name)}@")


def header_descriptors(header: str) -> List[str]:
    """Split a block header into its range descriptors.

    ``"chalk@^5.0.0", chalk@^5.6.0:`` gives ``["chalk@^5.0.0", "chalk@^5.6.0"]``.

    Args:
        header: Non-indented header line

    Returns:
        Unquoted descriptors
    """
    header = header.rstrip().rstrip(":")
    return [item.strip().strip('"').strip("'") for item in header.split(",") if item.strip()]


class YarnLockIndex(QueryIndex):
    """Name-by-name view over yarn.lock blocks."""

    dialect = "yarn"

    def _scan(self, name: str) -> Set[str]:
        pattern = descriptor_pattern(name)
        versions: Set[str] = set()
        descriptors: List[str] = []

        for line in self.lines:
            if HEADER_PATTERN.match(line):
                descriptors = header_descriptors(line)
                continue
            match = VERSION_PATTERN.match(line)
            if not match:
                continue
            # A header aliases several ranges onto one resolved version.
            if any(pattern.match(descriptor) for descriptor in descriptors):
                versions.add(match.group(1) or match.group(2))

        return versions


class YarnLockExtractor(BaseExtractor):
    """Extractor for yarn.lock files."""

    def __init__(self) -> None:
        """Initialize the yarn.lock extractor."""
        super().__init__()
        self.dialect = "yarn"
        self.filenames = ["yarn.lock"]

    def extract(self, content: str, source: Optional[Path] = None) -> YarnLockIndex:
        return YarnLockIndex(content)

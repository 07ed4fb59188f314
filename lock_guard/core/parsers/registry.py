"""Registry dispatching lockfiles to their dialect extractor."""

from pathlib import Path
from typing import Dict, List, Optional

from ...errors import ExtractorUnavailableError
from .base import BaseExtractor, LockfileIndex


class ParserRegistry:
    """Registry of lockfile extractors keyed by dialect."""

    def __init__(self) -> None:
        """Initialize the extractor registry."""
        self._extractors: Dict[str, BaseExtractor] = {}

    def register(self, dialect: str, extractor: BaseExtractor) -> None:
        """Register an extractor for a dialect.

        Args:
            dialect: Dialect name (e.g., 'npm', 'yarn')
            extractor: Extractor instance to register
        """
        self._extractors[dialect] = extractor

    def get_extractor(self, dialect: str) -> Optional[BaseExtractor]:
        """Get the extractor registered for a dialect.

        Args:
            dialect: Dialect name

        Returns:
            Extractor instance or None if not found
        """
        return self._extractors.get(dialect)

    def find_extractor_for_file(self, file_path: Path) -> Optional[BaseExtractor]:
        """Find the extractor that handles the given file name.

        Args:
            file_path: Path to the lockfile

        Returns:
            Extractor that can handle the file or None
        """
        for extractor in self._extractors.values():
            if extractor.can_parse(file_path):
                return extractor
        return None

    def dialect_for_file(self, file_path: Path) -> Optional[str]:
        """Get the dialect name for a lockfile, if recognised."""
        extractor = self.find_extractor_for_file(file_path)
        return extractor.dialect if extractor else None

    def get_supported_dialects(self) -> List[str]:
        """Get list of registered dialects.

        Returns:
            List of dialect names
        """
        return list(self._extractors.keys())

    def get_supported_filenames(self) -> List[str]:
        """Get every lockfile name some extractor handles.

        Returns:
            List of file names
        """
        return [name for extractor in self._extractors.values() for name in extractor.filenames]

    def parse_file(self, file_path: Path) -> LockfileIndex:
        """Extract a lockfile using the extractor for its name.

        Args:
            file_path: Path to the lockfile

        Returns:
            Lockfile index

        Raises:
            ExtractorUnavailableError: If no extractor handles the file name
            LockfileParseError: If the content cannot be parsed
        """
        extractor = self.find_extractor_for_file(file_path)
        if extractor is None:
            raise ExtractorUnavailableError(file_path)
        return extractor.parse(file_path)

"""Base extractor class and lockfile index models."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set


@dataclass(frozen=True)
class ResolvedPackage:
    """A package name and the version a lockfile resolved it to."""

    name: str
    version: str


class LockfileIndex(ABC):
    """Package name to resolved versions for a single lockfile."""

    dialect: str = ""

    @abstractmethod
    def versions_for(self, name: str) -> Optional[Set[str]]:
        """Get the versions recorded for a package.

        Args:
            name: Package name

        Returns:
            Set of versions (possibly empty when the package is present
            without a usable version), or None if the package is absent
        """
        pass


@dataclass
class PackageIndex(LockfileIndex):
    """Fully materialised index built from emitted packages."""

    packages: Dict[str, Set[str]] = field(default_factory=dict)
    dialect: str = ""

    @classmethod
    def from_packages(cls, packages: Iterable[ResolvedPackage], dialect: str = "") -> "PackageIndex":
        """Group resolved packages by name.

        Args:
            packages: Emitted (name, version) pairs
            dialect: Dialect that produced them

        Returns:
            Index of name to versions
        """
        index = cls(dialect=dialect)
        for package in packages:
            index.add(package.name, package.version)
        return index

    def add(self, name: str, version: Optional[str] = None) -> None:
        """Record a package, with or without a version.

        Args:
            name: Package name
            version: Resolved version, if known
        """
        versions = self.packages.setdefault(name, set())
        if version:
            versions.add(version)

    def versions_for(self, name: str) -> Optional[Set[str]]:
        versions = self.packages.get(name)
        return set(versions) if versions is not None else None


class QueryIndex(LockfileIndex):
    """Index answering name-by-name queries against raw lockfile text.

    Line-oriented dialects have unstructured headers, so versions are
    looked up per queried name and memoised.
    """

    def __init__(self, content: str) -> None:
        self.lines = content.splitlines()
        self._cache: Dict[str, Optional[Set[str]]] = {}

    def versions_for(self, name: str) -> Optional[Set[str]]:
        if name not in self._cache:
            found = self._scan(name)
            self._cache[name] = found or None
        cached = self._cache[name]
        return set(cached) if cached is not None else None

    @abstractmethod
    def _scan(self, name: str) -> Set[str]:
        """Collect every version recorded for ``name``."""
        pass


class BaseExtractor(ABC):
    """Abstract base class for lockfile extractors."""

    def __init__(self) -> None:
        """Initialize the extractor."""
        self.filenames: List[str] = []
        self.dialect: str = ""

    def can_parse(self, file_path: Path) -> bool:
        """Check if this extractor handles the given file.

        Args:
            file_path: Path to the file to check

        Returns:
            True if the file name belongs to this dialect
        """
        return file_path.name in self.filenames

    @abstractmethod
    def extract(self, content: str, source: Optional[Path] = None) -> LockfileIndex:
        """Build the lockfile index from raw content.

        Args:
            content: Raw lockfile text
            source: Originating path, used in error messages

        Returns:
            Index of package name to versions

        Raises:
            LockfileParseError: If the content does not match the dialect
        """
        pass

    def parse(self, file_path: Path) -> LockfileIndex:
        """Read and extract a lockfile from disk.

        Args:
            file_path: Path to the lockfile

        Returns:
            Index of package name to versions
        """
        self.validate_file(file_path)

        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()

        return self.extract(content, source=file_path)

    def validate_file(self, file_path: Path) -> None:
        """Validate that the file exists and is readable.

        Args:
            file_path: Path to validate

        Raises:
            FileNotFoundError: If file doesn't exist
            IsADirectoryError: If the path is not a regular file
            PermissionError: If file is not readable
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise IsADirectoryError(f"Path is not a file: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File is not readable: {file_path}")

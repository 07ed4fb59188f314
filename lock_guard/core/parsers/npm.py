"""npm package-lock.json / npm-shrinkwrap.json extractor."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from ...errors import LockfileParseError
from .base import BaseExtractor, PackageIndex, ResolvedPackage

INSTALL_DIR_MARKER = "node_modules/"


def key_to_name(key: str) -> Optional[str]:
    """Derive a package name from a flat ``packages`` key.

    ``node_modules/a/node_modules/@scope/b`` becomes ``@scope/b``.

    Args:
        key: Installation path key

    Returns:
        Package name, or None for the root entry
    """
    if not key:
        return None
    rest = key.split(INSTALL_DIR_MARKER)[-1]
    parts = rest.split("/")
    if parts[0].startswith("@"):
        scoped = parts[1] if len(parts) > 1 else ""
        return f"{parts[0]}/{scoped}"
    return parts[0] or None


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


class NpmLockExtractor(BaseExtractor):
    """Extractor for npm dependency-tree lockfiles (v1 nested, v2/v3 flat)."""

    def __init__(self) -> None:
        """Initialize the npm extractor."""
        super().__init__()
        self.dialect = "npm"
        self.filenames = ["package-lock.json", "npm-shrinkwrap.json"]

    def extract(self, content: str, source: Optional[Path] = None) -> PackageIndex:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LockfileParseError(source, f"invalid JSON ({e})") from e
        except RecursionError as e:
            raise LockfileParseError(source, "JSON nested too deeply") from e

        if not isinstance(data, dict):
            raise LockfileParseError(source, "top-level value is not an object")

        if "packages" in data:
            packages = data["packages"]
            if not isinstance(packages, dict):
                raise LockfileParseError(source, "'packages' is not an object")
            return PackageIndex.from_packages(self._flat_packages(packages), dialect=self.dialect)

        dependencies = data.get("dependencies") or {}
        if not isinstance(dependencies, dict):
            raise LockfileParseError(source, "'dependencies' is not an object")

        index = PackageIndex(dialect=self.dialect)
        self._walk_dependencies(dependencies, index)
        return index

    def _flat_packages(self, packages: Dict[str, Any]) -> Iterator[ResolvedPackage]:
        """Yield packages from the lockfile v2/v3 ``packages`` map.

        Args:
            packages: Map of installation path to package metadata

        Yields:
            Packages with both a name and a version
        """
        for key, meta in packages.items():
            if not isinstance(meta, dict):
                continue
            name = _string(meta.get("name")) or key_to_name(key)
            version = _string(meta.get("version"))
            if name and version:
                yield ResolvedPackage(name=name, version=version)

    def _walk_dependencies(self, dependencies: Dict[str, Any], index: PackageIndex) -> None:
        """Depth-first walk of a lockfile v1 ``dependencies`` tree.

        Nodes without a version are still recorded as present, and their
        children are always visited. The walk keeps its own stack, so tree
        depth is not bounded by the interpreter recursion limit.

        Args:
            dependencies: Map of package name to node
            index: Index to fill
        """
        stack = [dependencies]
        while stack:
            for name, node in stack.pop().items():
                if not name or not isinstance(node, dict):
                    continue
                index.add(name, _string(node.get("version")))
                children = node.get("dependencies")
                if isinstance(children, dict):
                    stack.append(children)

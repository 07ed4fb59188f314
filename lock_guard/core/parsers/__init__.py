"""Lockfile extractors for the supported npm-ecosystem dialects."""

from .base import BaseExtractor, LockfileIndex, PackageIndex, QueryIndex, ResolvedPackage
from .npm import NpmLockExtractor
from .pnpm import PnpmLockExtractor
from .registry import ParserRegistry
from .yarn import YarnLockExtractor

# Register built-in extractors
registry = ParserRegistry()
registry.register("npm", NpmLockExtractor())
registry.register("yarn", YarnLockExtractor())
registry.register("pnpm", PnpmLockExtractor())

# Convenience exports
LockfileParser = registry
__all__ = [
    "BaseExtractor",
    "LockfileIndex",
    "PackageIndex",
    "QueryIndex",
    "ResolvedPackage",
    "NpmLockExtractor",
    "YarnLockExtractor",
    "PnpmLockExtractor",
    "LockfileParser",
    "ParserRegistry",
    "registry",
]

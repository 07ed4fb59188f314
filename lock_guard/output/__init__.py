"""Output formatters for LockGuard."""

from .formatters import ConsoleFormatter, JSONFormatter, OverridesFormatter

__all__ = [
    "ConsoleFormatter",
    "JSONFormatter",
    "OverridesFormatter",
]

"""Utility functions and helpers for LockGuard."""

from .logging import setup_logging, get_logger
from .path_utils import LockfileRef, find_lockfiles

__all__ = [
    "setup_logging",
    "get_logger",
    "LockfileRef",
    "find_lockfiles",
]

"""Command-line interface for LockGuard."""

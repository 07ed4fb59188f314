"""Remediation of affected project directories."""

from .fixer import NEXT_STEPS, PackageManager, Remediator, detect_package_manager

__all__ = ["NEXT_STEPS", "PackageManager", "Remediator", "detect_package_manager"]

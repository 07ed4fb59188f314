"""Heuristic checks of built assets."""

from .bundle_scan import PAYLOAD_PATTERN, BundleHit, scan_bundle_dir

__all__ = ["PAYLOAD_PATTERN", "BundleHit", "scan_bundle_dir"]

"""Mirroring through rsync."""

from .orchestrator import MirrorEngine, exclude_patterns, mirror
from .rsync import RsyncEngine, anchor_pattern, escape_pattern

__all__ = [
    "MirrorEngine",
    "RsyncEngine",
    "anchor_pattern",
    "escape_pattern",
    "exclude_patterns",
    "mirror",
]

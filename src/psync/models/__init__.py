"""Pydantic models for psync."""

from .config import ConfigRecord
from .sync import ClonePlan, CloneScenario, MirrorResult

__all__ = [
    "ClonePlan",
    "CloneScenario",
    "ConfigRecord",
    "MirrorResult",
]

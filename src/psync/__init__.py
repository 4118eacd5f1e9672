"""psync — mirror a git working tree to another directory, minus ignored files."""

from ._version import __version__
from .config import CONFIG_NAME, find_config, load, save
from .exceptions import (
    MirrorError,
    MissingDirectoryError,
    NotARepositoryError,
    PsyncError,
    UsageError,
)
from .git import DulwichIgnoreOracle, IgnoreOracle, ignore_set
from .mirror import RsyncEngine, mirror
from .models import ClonePlan, CloneScenario, ConfigRecord, MirrorResult
from .verbs import classify_clone, clone, dispatch, plan_clone, sync

__all__ = [
    "CONFIG_NAME",
    "ClonePlan",
    "CloneScenario",
    "ConfigRecord",
    "DulwichIgnoreOracle",
    "IgnoreOracle",
    "MirrorError",
    "MirrorResult",
    "MissingDirectoryError",
    "NotARepositoryError",
    "PsyncError",
    "RsyncEngine",
    "UsageError",
    "__version__",
    "classify_clone",
    "clone",
    "dispatch",
    "find_config",
    "ignore_set",
    "load",
    "mirror",
    "plan_clone",
    "save",
    "sync",
]

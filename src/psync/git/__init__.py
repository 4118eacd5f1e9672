"""Ignore-state queries with dulwich."""

from .ignore import (
    VCS_METADATA_DIR,
    DulwichIgnoreOracle,
    IgnoreOracle,
    ignore_set,
)

__all__ = [
    "VCS_METADATA_DIR",
    "DulwichIgnoreOracle",
    "IgnoreOracle",
    "ignore_set",
]

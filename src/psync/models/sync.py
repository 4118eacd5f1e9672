"""Models describing a planned or executed transfer."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class CloneScenario(str, Enum):
    """Rows of the clone role-disambiguation table."""

    NEST_IN_DESTINATION = "nest_in_destination"
    CREATE_DESTINATION = "create_destination"
    INTO_DESTINATION = "into_destination"
    REVERSE = "reverse"
    NEITHER = "neither"


class ClonePlan(BaseModel):
    """Resolved direction of a clone.

    ``origin`` is read from, ``target`` is created (if needed) and seeded.
    """

    scenario: CloneScenario
    origin: Path
    target: Path
    created_side: Literal["source", "destination"]


class MirrorResult(BaseModel):
    """Outcome of one delegated transfer."""

    success: bool
    returncode: int
    command: list[str] = Field(default_factory=list)
    ignored: list[str] = Field(default_factory=list)

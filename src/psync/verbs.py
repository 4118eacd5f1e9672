"""The ``clone`` and ``sync`` verbs.

``clone`` seeds a new location from an existing one and records the pairing
in a ``psync_config`` at the new location.  ``sync`` reads that pairing
(searching upward from the working directory) and mirrors ``local`` onto
``remote``, always in that direction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .config import CONFIG_NAME, find_config, load, save
from .exceptions import MirrorError, MissingDirectoryError, UsageError
from .git.ignore import IgnoreOracle, ignore_set
from .mirror.orchestrator import MirrorEngine, mirror
from .models.config import ConfigRecord
from .models.sync import ClonePlan, CloneScenario, MirrorResult
from .paths import canonical_path, has_trailing_separator, resolve_path

logger = logging.getLogger(__name__)

CLONE_VERBS: frozenset[str] = frozenset({"clone", "checkout", "co", "c"})
SYNC_VERBS: frozenset[str] = frozenset({"sync", "s"})


# ------------------------------------------------------------------
# Clone role disambiguation
# ------------------------------------------------------------------


def classify_clone(
    *,
    source_is_dir: bool,
    source_exists: bool,
    destination_is_dir: bool,
    destination_exists: bool,
    trailing_separator: bool,
) -> CloneScenario:
    """Pick the clone scenario from the state of both paths.

    ===========  ==================  ===================
    source       destination         scenario
    ===========  ==================  ===================
    directory    directory + ``/``   NEST_IN_DESTINATION
    directory    directory           INTO_DESTINATION
    directory    absent              CREATE_DESTINATION
    absent       directory           REVERSE
    anything else                    NEITHER
    ===========  ==================  ===================
    """
    if source_is_dir:
        if destination_is_dir:
            if trailing_separator:
                return CloneScenario.NEST_IN_DESTINATION
            return CloneScenario.INTO_DESTINATION
        if not destination_exists:
            return CloneScenario.CREATE_DESTINATION
        return CloneScenario.NEITHER
    if not source_exists and destination_is_dir:
        return CloneScenario.REVERSE
    return CloneScenario.NEITHER


def plan_clone(source: str, destination: str, base: Path) -> ClonePlan:
    """Resolve which side is copied and which side is created.

    Raises :class:`MissingDirectoryError` when neither side can act as the
    origin of the copy.
    """
    source_path = resolve_path(source, base)
    destination_path = resolve_path(destination, base)

    scenario = classify_clone(
        source_is_dir=source_path.is_dir(),
        source_exists=source_path.exists(),
        destination_is_dir=destination_path.is_dir(),
        destination_exists=destination_path.exists(),
        trailing_separator=has_trailing_separator(destination),
    )
    logger.debug("Clone %s -> %s: %s", source_path, destination_path, scenario.value)

    if scenario is CloneScenario.NEST_IN_DESTINATION:
        return ClonePlan(
            scenario=scenario,
            origin=source_path,
            target=destination_path / source_path.name,
            created_side="destination",
        )
    if scenario in (CloneScenario.INTO_DESTINATION, CloneScenario.CREATE_DESTINATION):
        return ClonePlan(
            scenario=scenario,
            origin=source_path,
            target=destination_path,
            created_side="destination",
        )
    if scenario is CloneScenario.REVERSE:
        return ClonePlan(
            scenario=scenario,
            origin=destination_path,
            target=source_path,
            created_side="source",
        )

    if source_path.is_dir():
        raise MissingDirectoryError("destination", str(destination_path))
    raise MissingDirectoryError("source", str(source_path))


# ------------------------------------------------------------------
# Verbs
# ------------------------------------------------------------------


def _check(result: MirrorResult) -> MirrorResult:
    if not result.success:
        raise MirrorError(f"rsync exited with status {result.returncode}")
    return result


def clone(
    args: Sequence[str],
    *,
    cwd: Path,
    oracle: IgnoreOracle | None = None,
    engine: MirrorEngine | None = None,
    verbose: bool = False,
    dry_run: bool = False,
) -> MirrorResult:
    """Seed a new location and write its ``psync_config``.

    With one argument the working directory is the source.  The config is
    written at the side that was created, with ``local`` pointing at it and
    ``remote`` at the side it was copied from.
    """
    if len(args) == 1:
        source, destination = str(cwd), args[0]
    elif len(args) == 2:
        source, destination = args
    else:
        raise UsageError("clone takes DESTINATION or SOURCE DESTINATION")

    plan = plan_clone(source, destination, cwd)
    origin = canonical_path(plan.origin)
    ignored = ignore_set(origin, oracle)

    result = _check(
        mirror(origin, plan.target, ignored, engine=engine, verbose=verbose, dry_run=dry_run)
    )
    if dry_run:
        return result

    target = canonical_path(plan.target)
    save(target / CONFIG_NAME, local=target, remote=origin)
    return result


def sync(
    args: Sequence[str],
    *,
    cwd: Path,
    oracle: IgnoreOracle | None = None,
    engine: MirrorEngine | None = None,
    verbose: bool = False,
    dry_run: bool = False,
) -> MirrorResult:
    """Mirror ``local`` onto ``remote``; arguments override the config.

    Zero arguments use both bindings, one argument replaces ``remote`` and
    two arguments replace both.
    """
    if len(args) > 2:
        raise UsageError("sync takes at most SOURCE and DESTINATION")

    config_path = find_config(cwd)
    record = load(config_path) if config_path else ConfigRecord()

    if len(args) == 0:
        source, destination = record.local, record.remote
    elif len(args) == 1:
        source, destination = record.local, args[0]
    else:
        source, destination = args

    if not source:
        raise MissingDirectoryError("source")
    source_path = resolve_path(source, cwd)
    if not source_path.is_dir():
        raise MissingDirectoryError("source", str(source_path))
    if not destination:
        raise MissingDirectoryError("destination")
    destination_path = resolve_path(destination, cwd)

    ignored = ignore_set(source_path, oracle)
    return _check(
        mirror(
            source_path,
            destination_path,
            ignored,
            engine=engine,
            verbose=verbose,
            dry_run=dry_run,
        )
    )


def dispatch(args: Sequence[str], **kwargs: Any) -> MirrorResult:
    """Route positional arguments to a verb; ``sync`` when none is named."""
    if args and args[0] in CLONE_VERBS:
        return clone(args[1:], **kwargs)
    if args and args[0] in SYNC_VERBS:
        return sync(args[1:], **kwargs)
    return sync(args, **kwargs)

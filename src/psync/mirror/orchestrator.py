"""Mirror a source root onto a destination root, minus ignored paths."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from ..config import CONFIG_NAME
from ..exceptions import MissingDirectoryError
from ..git.ignore import VCS_METADATA_DIR
from ..models.sync import MirrorResult
from ..paths import ensure_directory
from .rsync import RsyncEngine, anchor_pattern, escape_pattern

logger = logging.getLogger(__name__)


class MirrorEngine(Protocol):
    """Anything that can copy one tree onto another and report the argv it ran."""

    def transfer(
        self,
        source: Path,
        destination: Path,
        exclude: Iterable[str],
        *,
        always_include: Iterable[str] = (),
        delete_extraneous: bool = True,
        archive: bool = True,
        verbose: bool = False,
        dry_run: bool = False,
    ) -> subprocess.CompletedProcess[str]: ...


def exclude_patterns(ignored: Iterable[str], *, config_name: str = CONFIG_NAME) -> list[str]:
    """Convert an ignore set into sorted rsync exclusion patterns.

    Paths are anchored at the transfer root.  The config file name is left
    unanchored so it is excluded wherever it appears.
    """
    patterns = []
    for path in sorted(set(ignored)):
        if path == config_name:
            patterns.append(escape_pattern(path))
        else:
            patterns.append(anchor_pattern(path))
    return patterns


def mirror(
    source_root: Path,
    destination_root: Path,
    ignored: Iterable[str],
    *,
    engine: MirrorEngine | None = None,
    metadata_dir: str = VCS_METADATA_DIR,
    verbose: bool = False,
    dry_run: bool = False,
) -> MirrorResult:
    """Make *destination_root* a copy of *source_root* without *ignored*.

    The destination is created (with parents) when missing, except on a dry
    run.  The VCS metadata directory is always transferred.
    """
    if not source_root.is_dir():
        raise MissingDirectoryError("source", str(source_root))
    if destination_root.exists() and not destination_root.is_dir():
        raise MissingDirectoryError("destination", str(destination_root))
    if not dry_run:
        try:
            destination_root = ensure_directory(destination_root)
        except OSError as exc:
            raise MissingDirectoryError(
                "destination", str(destination_root), exc.strerror or str(exc)
            ) from exc

    if engine is None:
        engine = RsyncEngine()

    ignored_list = sorted(set(ignored))
    for path in ignored_list:
        logger.info("Ignoring %s", path)
    logger.info("Mirroring %s -> %s", source_root, destination_root)

    completed = engine.transfer(
        source_root,
        destination_root,
        exclude_patterns(ignored_list),
        always_include=[metadata_dir],
        verbose=verbose,
        dry_run=dry_run,
    )
    return MirrorResult(
        success=completed.returncode == 0,
        returncode=completed.returncode,
        command=[str(arg) for arg in completed.args],
        ignored=ignored_list,
    )

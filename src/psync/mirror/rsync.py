"""rsync adapter: the engine that actually moves files.

Exclusion patterns are fed to ``rsync --exclude-from=-`` on stdin so that
large ignore sets never hit the command-line length limit.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..exceptions import MirrorError

logger = logging.getLogger(__name__)

_WILDCARDS = ("\\", "*", "?", "[")


def escape_pattern(path: str) -> str:
    """Escape rsync wildcard characters so *path* matches literally."""
    for char in _WILDCARDS:
        path = path.replace(char, "\\" + char)
    return path


def anchor_pattern(path: str) -> str:
    """Turn a root-relative path into an rsync pattern anchored at the root."""
    return "/" + escape_pattern(path.lstrip("/"))


def format_command(command: Sequence[str]) -> str:
    return shlex.join(command)


class RsyncEngine:
    """Run ``rsync`` with delete-mirroring semantics.

    The constructor accepts plain values; no environment variables are read.
    """

    def __init__(self, *, binary: str = "rsync", extra_args: Sequence[str] = ()) -> None:
        self.binary = binary
        self.extra_args = list(extra_args)

    def build_command(
        self,
        source: Path,
        destination: Path,
        *,
        always_include: Iterable[str] = (),
        delete_extraneous: bool = True,
        archive: bool = True,
        verbose: bool = False,
        dry_run: bool = False,
    ) -> list[str]:
        """Return the argv for one transfer; exclusions are read from stdin."""
        command = [self.binary]
        if archive:
            command.append("--archive")
        if verbose:
            command.append("--verbose")
        if dry_run:
            command.append("--dry-run")
        if delete_extraneous:
            command += ["--delete", "--delete-excluded"]
        command += self.extra_args
        # Includes must precede the exclude list: rsync uses the first match.
        command += [f"--include={anchor_pattern(p)}" for p in always_include]
        command.append("--exclude-from=-")
        command += [str(source).rstrip("/") + "/", str(destination)]
        return command

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
    ) -> subprocess.CompletedProcess[str]:
        """Run rsync and return the argv it ran with its exit status.

        *exclude* holds ready-made rsync patterns, one per line on stdin.
        Raises :class:`MirrorError` if the binary cannot be started.
        """
        command = self.build_command(
            source,
            destination,
            always_include=always_include,
            delete_extraneous=delete_extraneous,
            archive=archive,
            verbose=verbose,
            dry_run=dry_run,
        )
        logger.info("Running %s", format_command(command))
        try:
            result = subprocess.run(
                command,
                input="".join(f"{pattern}\n" for pattern in exclude),
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise MirrorError(f"{self.binary} not found") from exc
        except OSError as exc:
            raise MirrorError(f"cannot run {self.binary}: {exc}") from exc

        if result.returncode != 0:
            logger.warning("%s exited with status %d", self.binary, result.returncode)
        return subprocess.CompletedProcess(command, result.returncode)

"""Config Store: the ``psync_config`` file holding ``local`` and ``remote``.

The file is written as shell assignments so it stays sourceable::

    local='/home/me/project'
    remote='/mnt/server/project'

Reading is permissive: unknown keys, comments and lines that do not parse
are ignored.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from .models.config import ConfigRecord

logger = logging.getLogger(__name__)

CONFIG_NAME = "psync_config"

_KEYS: frozenset[str] = frozenset({"local", "remote"})


def find_config(start_dir: Path, name: str = CONFIG_NAME) -> Path | None:
    """Return the first *name* file in *start_dir* or any of its parents.

    Returns ``None`` when no such file exists up to the filesystem root.
    """
    current = Path(start_dir).absolute()
    for directory in (current, *current.parents):
        candidate = directory / name
        if candidate.is_file():
            logger.debug("Found config at %s", candidate)
            return candidate
    logger.debug("No %s found above %s", name, current)
    return None


def _parse_line(line: str) -> tuple[str, str] | None:
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError:
        return None
    if len(tokens) != 1 or "=" not in tokens[0]:
        return None
    key, _, value = tokens[0].partition("=")
    return key, value


def load(path: Path) -> ConfigRecord:
    """Parse the ``local`` and ``remote`` bindings from *path*.

    Relative values are taken relative to the directory holding *path*.
    """
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key not in _KEYS:
            continue
        if value and not Path(value).expanduser().is_absolute():
            value = str(path.parent / value)
        values[key] = value
    return ConfigRecord(**values)


def _quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


def save(path: Path, local: str | Path, remote: str | Path) -> ConfigRecord:
    """Write *local* and *remote* to *path*, replacing any existing file."""
    record = ConfigRecord(local=str(local), remote=str(remote))
    path.write_text(
        f"local={_quote(record.local)}\nremote={_quote(record.remote)}\n",
        encoding="utf-8",
    )
    logger.info("Wrote %s (local=%s, remote=%s)", path, record.local, record.remote)
    return record

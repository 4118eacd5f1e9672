"""Path resolution for source and destination roots.

Nothing here reads the process working directory: callers pass the base
directory that relative paths are joined to.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def has_trailing_separator(raw: str) -> bool:
    """Return ``True`` if *raw* ends with a path separator."""
    if raw.endswith(os.sep):
        return True
    return bool(os.altsep) and raw.endswith(os.altsep)


def is_directory(path: Path) -> bool:
    return path.is_dir()


def resolve_path(raw: str | os.PathLike[str], base: Path) -> Path:
    """Return an absolute form of *raw*, joined to *base* when relative.

    Existing directories are fully canonicalised.  Existing files keep their
    own name under a canonical parent.  Paths that do not exist yet are only
    normalised; call :func:`canonical_path` once they have been created.
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path

    if path.is_dir():
        return path.resolve()
    if path.exists():
        return path.parent.resolve() / path.name
    return Path(os.path.normpath(path))


def canonical_path(path: Path) -> Path:
    """Canonicalise a path that is known to exist."""
    return path.resolve(strict=True)


def ensure_directory(path: Path) -> Path:
    """Create *path* (and parents) if needed and return its canonical form."""
    if not path.is_dir():
        path.mkdir(parents=True, exist_ok=True)
        logger.info("Created directory %s", path)
    return canonical_path(path)

"""Ignore-set resolution backed by dulwich (no git binary required).

The walk reproduces ``git ls-files --others --ignored --exclude-standard
--directory``: untracked paths matched by ignore rules, with a directory
excluded by name reported once (trailing ``/``) instead of its contents.
Nested repositories are not entered.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from dulwich.errors import NotGitRepository
from dulwich.ignore import IgnoreFilterManager
from dulwich.repo import Repo

from ..config import CONFIG_NAME
from ..exceptions import NotARepositoryError

logger = logging.getLogger(__name__)

VCS_METADATA_DIR = ".git"


class IgnoreOracle(Protocol):
    """Anything that can list the ignored paths below a repository root."""

    def ignored_paths(self, root: Path) -> set[str]: ...


class DulwichIgnoreOracle:
    """List ignored, untracked paths of a working tree using dulwich."""

    def __init__(self, *, metadata_dir: str = VCS_METADATA_DIR) -> None:
        self.metadata_dir = metadata_dir

    def _open(self, root: Path) -> Repo:
        try:
            return Repo.discover(str(root))
        except NotGitRepository as exc:
            raise NotARepositoryError(f"not a git repository: {root}") from exc

    def ignored_paths(self, root: Path) -> set[str]:
        """Return root-relative POSIX paths of ignored, untracked entries.

        Raises :class:`NotARepositoryError` if *root* is not inside a git
        working tree.
        """
        root = Path(root).resolve()
        repo = self._open(root)
        try:
            worktree = Path(repo.path).resolve()
            prefix = root.relative_to(worktree).as_posix()
            prefix = "" if prefix == "." else prefix + "/"

            tracked = {p.decode("utf-8", "surrogateescape") for p in repo.open_index()}
            tracked_dirs: set[str] = set()
            for path in tracked:
                parts = path.split("/")[:-1]
                for i in range(1, len(parts) + 1):
                    tracked_dirs.add("/".join(parts[:i]))

            walk = _IgnoreWalk(
                IgnoreFilterManager.from_repo(repo),
                tracked,
                tracked_dirs,
                prefix,
                self.metadata_dir,
            )
            walk.visit(root, "")
        finally:
            repo.close()

        logger.debug("%d ignored path(s) below %s", len(walk.found), root)
        return walk.found


class _IgnoreWalk:
    def __init__(
        self,
        manager: IgnoreFilterManager,
        tracked: set[str],
        tracked_dirs: set[str],
        prefix: str,
        metadata_dir: str,
    ) -> None:
        self.manager = manager
        self.tracked = tracked
        self.tracked_dirs = tracked_dirs
        self.prefix = prefix
        self.metadata_dir = metadata_dir
        self.found: set[str] = set()

    def visit(self, directory: Path, rel_dir: str) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as exc:
            logger.warning("Cannot read %s: %s", directory, exc)
            return

        for entry in entries:
            if entry.name == self.metadata_dir:
                continue
            rel_path = rel_dir + entry.name
            repo_path = self.prefix + rel_path

            if entry.is_dir(follow_symlinks=False):
                self._visit_dir(entry, rel_path, repo_path)
                continue

            if repo_path in self.tracked:
                continue
            if self.manager.is_ignored(repo_path):
                self.found.add(rel_path)

    def _visit_dir(self, entry: os.DirEntry[str], rel_path: str, repo_path: str) -> None:
        # Only a pattern naming the directory itself (or an ancestor) stops
        # the walk; ``dir/*`` leaves room for a ``!dir/keep`` below.
        prunable = self.manager.may_prune_directory(repo_path + "/")

        if repo_path in self.tracked:
            # Submodule checkout.
            return
        if os.path.lexists(os.path.join(entry.path, self.metadata_dir)):
            # Nested repository: its contents follow its own rules.
            if prunable:
                self.found.add(rel_path + "/")
            return
        if prunable and repo_path not in self.tracked_dirs:
            self.found.add(rel_path + "/")
            return
        self.visit(Path(entry.path), rel_path + "/")


def ignore_set(root: Path, oracle: IgnoreOracle | None = None) -> set[str]:
    """Return the exclusion set for *root*: ignored paths plus the config file."""
    if oracle is None:
        oracle = DulwichIgnoreOracle()
    paths = set(oracle.ignored_paths(root))
    paths.add(CONFIG_NAME)
    return paths

"""Shared fixtures for psync tests."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest
from dulwich import porcelain

from psync.mirror.rsync import RsyncEngine

_AUTHOR = b"Test <test@example.com>"


def _init_repo(root: Path, files: dict[str, str], tracked: Iterable[str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    porcelain.init(str(root))
    for rel_path, content in files.items():
        target = root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    porcelain.add(str(root), paths=[str(root / p) for p in tracked])
    porcelain.commit(str(root), message=b"Initial commit", author=_AUTHOR, committer=_AUTHOR)
    return root


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Repository with tracked files, ignored files and an ignored directory."""
    return _init_repo(
        tmp_path / "repo",
        {
            ".gitignore": "build/\n*.log\n",
            "a.txt": "a\n",
            "b/c.txt": "c\n",
            "build/out.bin": "binary\n",
            "debug.log": "log line\n",
            "notes.md": "untracked, not ignored\n",
        },
        tracked=[".gitignore", "a.txt", "b/c.txt"],
    )


@pytest.fixture
def init_repo():
    """Factory building a committed repository from a ``{path: content}`` map."""
    return _init_repo


class FakeEngine(RsyncEngine):
    """Records transfers instead of running rsync."""

    def __init__(self, returncode: int = 0) -> None:
        super().__init__()
        self.returncode = returncode
        self.calls: list[dict[str, Any]] = []

    def transfer(self, source, destination, exclude, **kwargs) -> subprocess.CompletedProcess[str]:  # type: ignore[override]
        self.calls.append(
            {
                "source": source,
                "destination": destination,
                "exclude": list(exclude),
                **kwargs,
            }
        )
        return subprocess.CompletedProcess(
            self.build_command(source, destination, **kwargs), self.returncode
        )


class FakeOracle:
    """Returns a fixed ignore set and remembers the roots it was asked about."""

    def __init__(self, paths: Iterable[str] = (), error: Exception | None = None) -> None:
        self.paths = set(paths)
        self.error = error
        self.roots: list[Path] = []

    def ignored_paths(self, root: Path) -> set[str]:
        self.roots.append(root)
        if self.error is not None:
            raise self.error
        return set(self.paths)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def failing_engine() -> FakeEngine:
    return FakeEngine(returncode=23)


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle({"build/"})


@pytest.fixture
def make_oracle():
    return FakeOracle

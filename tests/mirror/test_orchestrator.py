"""Tests for the mirror orchestrator."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from psync.exceptions import MissingDirectoryError
from psync.mirror.orchestrator import exclude_patterns, mirror


class TestExcludePatterns:
    def test_anchors_paths_but_not_config(self) -> None:
        assert exclude_patterns({"psync_config", "build/", "a/b.log"}) == [
            "/a/b.log",
            "/build/",
            "psync_config",
        ]

    def test_escapes_wildcards(self) -> None:
        assert exclude_patterns(["weird*name"]) == ["/weird\\*name"]


class TestMirror:
    def test_creates_destination(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        dst = tmp_path / "deep" / "dst"
        result = mirror(src, dst, {"build/"}, engine=fake_engine)
        assert dst.is_dir()
        assert result.success is True
        assert result.returncode == 0

    def test_passes_metadata_override_and_patterns(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        result = mirror(src, tmp_path / "dst", {"build/", "psync_config"}, engine=fake_engine)
        call = fake_engine.calls[0]
        assert call["always_include"] == [".git"]
        assert call["exclude"] == ["/build/", "psync_config"]
        assert "--include=/.git" in result.command
        assert result.ignored == ["build/", "psync_config"]

    def test_missing_source(self, tmp_path: Path, fake_engine) -> None:
        with pytest.raises(MissingDirectoryError, match="source") as info:
            mirror(tmp_path / "missing", tmp_path / "dst", set(), engine=fake_engine)
        assert info.value.side == "source"
        assert fake_engine.calls == []
        assert not (tmp_path / "dst").exists()

    def test_destination_is_a_file(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        (tmp_path / "dst").write_text("not a dir")
        with pytest.raises(MissingDirectoryError) as info:
            mirror(src, tmp_path / "dst", set(), engine=fake_engine)
        assert info.value.side == "destination"
        assert fake_engine.calls == []

    def test_failure_reported(self, tmp_path: Path, failing_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        result = mirror(src, tmp_path / "dst", set(), engine=failing_engine)
        assert result.success is False
        assert result.returncode == 23

    def test_dry_run_creates_nothing(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        mirror(src, tmp_path / "dst", set(), engine=fake_engine, dry_run=True)
        assert not (tmp_path / "dst").exists()
        assert fake_engine.calls[0]["dry_run"] is True

    def test_verbose_forwarded(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        result = mirror(src, tmp_path / "dst", set(), engine=fake_engine, verbose=True)
        assert fake_engine.calls[0]["verbose"] is True
        assert "--verbose" in result.command

    def test_destination_cannot_be_created(self, tmp_path: Path, fake_engine) -> None:
        src = tmp_path / "src"
        src.mkdir()
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(MissingDirectoryError, match="cannot create destination") as info:
            mirror(src, blocker / "dst", set(), engine=fake_engine)
        assert info.value.side == "destination"
        assert isinstance(info.value.__cause__, OSError)
        assert fake_engine.calls == []

    def test_command_is_what_the_engine_ran(self, tmp_path: Path) -> None:
        class WrappedEngine:
            def transfer(self, source, destination, exclude, **kwargs):
                return subprocess.CompletedProcess(["ionice", "rsync", "--archive"], 0)

        src = tmp_path / "src"
        src.mkdir()
        result = mirror(src, tmp_path / "dst", set(), engine=WrappedEngine())
        assert result.command == ["ionice", "rsync", "--archive"]

"""Tests for node_starter.files."""

from __future__ import annotations

from pathlib import Path

import pytest

from node_starter.errors import WriteError
from node_starter.files import ScaffoldWriter
from node_starter.models import WriteOutcome


class TestWrite:
    def test_creates_file(self, tmp_path: Path) -> None:
        outcome = ScaffoldWriter(tmp_path).write("tsconfig.json", "{}")
        assert outcome is WriteOutcome.CREATED
        assert (tmp_path / "tsconfig.json").read_text() == "{}"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        ScaffoldWriter(tmp_path).write("scripts/release.mjs", "// release")
        assert (tmp_path / "scripts" / "release.mjs").read_text() == "// release"

    def test_keeps_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "README.md"
        target.write_text("sentinel")

        outcome = ScaffoldWriter(tmp_path).write("README.md", "new", overwrite=False)

        assert outcome is WriteOutcome.SKIPPED
        assert target.read_text() == "sentinel"

    def test_overwrites_when_asked(self, tmp_path: Path) -> None:
        target = tmp_path / "README.md"
        target.write_text("sentinel")

        outcome = ScaffoldWriter(tmp_path).write("README.md", "new", overwrite=True)

        assert outcome is WriteOutcome.OVERWRITTEN
        assert target.read_text() == "new"

    def test_filesystem_failure(self, tmp_path: Path) -> None:
        (tmp_path / "scripts").write_text("not a directory")
        with pytest.raises(WriteError, match="scripts/release.mjs"):
            ScaffoldWriter(tmp_path).write("scripts/release.mjs", "x")


class TestEnsureDirectory:
    def test_creates_missing(self, tmp_path: Path) -> None:
        assert ScaffoldWriter(tmp_path).ensure_directory("utils") is True
        assert (tmp_path / "utils").is_dir()

    def test_existing_is_left_alone(self, tmp_path: Path) -> None:
        (tmp_path / "utils").mkdir()
        (tmp_path / "utils" / "keep.ts").write_text("x")
        assert ScaffoldWriter(tmp_path).ensure_directory("utils") is False
        assert (tmp_path / "utils" / "keep.ts").exists()

"""Tests for the grid_hashes.txt codec."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from grid_core.fingerprint import digest
from grid_core.manifest import (
    build_hash_manifest,
    format_hash_manifest,
    parse_hash_manifest,
    write_hash_manifest,
)


class TestParseHashManifest:
    """Test parse_hash_manifest function."""

    def test_well_formed_lines(self) -> None:
        """Should map filenames to digests."""
        manifest = parse_hash_manifest("a.json,h1\nb.json,h2\n")

        assert dict(manifest) == {"a.json": "h1", "b.json": "h2"}

    def test_skips_line_without_comma(self) -> None:
        """Should keep only the well-formed line."""
        manifest = parse_hash_manifest("a.json,h1\nthis line has no comma\n")

        assert len(manifest) == 1
        assert manifest["a.json"] == "h1"

    def test_skips_blank_lines(self) -> None:
        """Should ignore empty and whitespace-only lines."""
        manifest = parse_hash_manifest("\n\n   \na.json,h1\r\n\n")

        assert dict(manifest) == {"a.json": "h1"}

    def test_splits_on_first_comma(self) -> None:
        """Should keep everything after the first comma as the digest."""
        manifest = parse_hash_manifest("a.json,h1,extra\n")

        assert manifest["a.json"] == "h1,extra"

    def test_trims_whitespace(self) -> None:
        """Should strip surrounding whitespace from both fields."""
        manifest = parse_hash_manifest("  a.json , h1  \n")

        assert manifest["a.json"] == "h1"

    def test_later_duplicate_wins(self) -> None:
        """Should keep the last digest for a repeated filename."""
        manifest = parse_hash_manifest("a.json,h1\na.json,h2\n")

        assert dict(manifest) == {"a.json": "h2"}

    def test_empty_text(self) -> None:
        """Should return an empty manifest."""
        assert len(parse_hash_manifest("")) == 0

    def test_warns_about_malformed_lines(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log a warning when lines were dropped."""
        with caplog.at_level(logging.WARNING, logger="grid_core.manifest"):
            parse_hash_manifest("broken\n")

        assert "malformed" in caplog.text


class TestBuildHashManifest:
    """Test build_hash_manifest function."""

    def test_digests_json_files(self, tmp_path: Path) -> None:
        """Should hash every .json file and ignore others."""
        (tmp_path / "a.json").write_bytes(b'{"a": 1}')
        (tmp_path / "b.json").write_bytes(b'{"b": 2}')
        (tmp_path / "notes.txt").write_text("not a grid")

        manifest = build_hash_manifest(tmp_path)

        assert dict(manifest) == {
            "a.json": digest(b'{"a": 1}'),
            "b.json": digest(b'{"b": 2}'),
        }

    def test_empty_folder(self, tmp_path: Path) -> None:
        """Should return an empty manifest."""
        assert len(build_hash_manifest(tmp_path)) == 0


class TestFormatHashManifest:
    """Test format_hash_manifest and write_hash_manifest functions."""

    def test_sorted_lines_with_trailing_newline(self) -> None:
        """Should emit one sorted filename,digest line per entry."""
        text = format_hash_manifest({"b.json": "h2", "a.json": "h1"})

        assert text == "a.json,h1\nb.json,h2\n"

    def test_empty(self) -> None:
        """Should emit nothing for an empty manifest."""
        assert format_hash_manifest({}) == ""

    def test_written_file_parses_back(self, tmp_path: Path) -> None:
        """Should write a file the parser reads back unchanged."""
        grids = tmp_path / "grids"
        grids.mkdir()
        (grids / "x_2024-01-01_p7_35.json").write_bytes(b"[1, 2, 3]")
        manifest = build_hash_manifest(grids)
        out = tmp_path / "grid_hashes.txt"

        write_hash_manifest(manifest, out)

        assert dict(parse_hash_manifest(out.read_text(encoding="utf-8"))) == dict(manifest)

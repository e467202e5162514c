"""Tests for the generate_hashes maintenance script."""

from __future__ import annotations

from pathlib import Path

import generate_hashes
from grid_core.fingerprint import digest


class TestGenerateHashes:
    """Test generate_hashes.main."""

    def test_writes_manifest(self, tmp_path: Path) -> None:
        """Should write one line per grid file."""
        grids = tmp_path / "grids"
        grids.mkdir()
        (grids / "b_2024-02-02.json").write_bytes(b"b")
        (grids / "a_2024-01-01.json").write_bytes(b"a")
        out = tmp_path / "grid_hashes.txt"

        assert generate_hashes.main([str(grids), str(out)]) == 0

        assert out.read_text(encoding="utf-8") == (
            f"a_2024-01-01.json,{digest(b'a')}\n"
            f"b_2024-02-02.json,{digest(b'b')}\n"
        )

    def test_missing_folder(self, tmp_path: Path) -> None:
        """Should fail when the grids folder does not exist."""
        assert generate_hashes.main([str(tmp_path / "nope"), str(tmp_path / "out.txt")]) == 1

    def test_no_grid_files(self, tmp_path: Path) -> None:
        """Should not write a file when there is nothing to hash."""
        out = tmp_path / "out.txt"

        assert generate_hashes.main([str(tmp_path), str(out)]) == 0
        assert not out.exists()

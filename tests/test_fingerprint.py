"""Tests for grid file fingerprinting."""

from __future__ import annotations

from pathlib import Path

from grid_core.fingerprint import digest, digest_file


class TestDigest:
    """Test digest function."""

    def test_known_md5(self) -> None:
        """Should match the MD5 used by the published manifest."""
        assert digest(b"Hello, World!") == "65a8e27d8879283831b664bd8b7f0ad4"

    def test_empty_bytes(self) -> None:
        """Should hash empty content."""
        assert digest(b"") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_deterministic(self) -> None:
        """Should return the same digest for the same bytes."""
        data = b'{"version": 3, "configs": []}'
        assert digest(data) == digest(data)

    def test_different_content(self) -> None:
        """Should differ when a single byte changes."""
        assert digest(b'{"a": 1}') != digest(b'{"a": 2}')

    def test_lowercase_hex(self) -> None:
        """Should be 32 lowercase hex characters."""
        result = digest(b"\x00\xff" * 100)
        assert len(result) == 32
        assert result == result.lower()
        int(result, 16)


class TestDigestFile:
    """Test digest_file function."""

    def test_matches_bytes_digest(self, tmp_path: Path) -> None:
        """Should hash the raw file bytes, independent of the path."""
        content = b'{\r\n  "version": 3\r\n}'
        first = tmp_path / "a.json"
        second = tmp_path / "nested" / "b.json"
        second.parent.mkdir()
        first.write_bytes(content)
        second.write_bytes(content)

        assert digest_file(first) == digest(content)
        assert digest_file(first) == digest_file(second)

"""Tests for persistent settings."""

from __future__ import annotations

import json
from pathlib import Path

from grid_core.settings import SettingsManager


class TestSettingsManager:
    """Test SettingsManager."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Should use defaults when no settings file exists."""
        settings = SettingsManager(tmp_path / "settings.json")

        assert settings.steam_path == ""
        assert settings.request_timeout == 10.0
        assert settings.get("start_minimized") is False

    def test_persists_on_set(self, tmp_path: Path) -> None:
        """Should write changes and read them back."""
        path = tmp_path / "settings.json"
        settings = SettingsManager(path)

        settings.steam_path = "/games/Steam"
        settings.request_timeout = 4.5

        reloaded = SettingsManager(path)
        assert reloaded.steam_path == "/games/Steam"
        assert reloaded.request_timeout == 4.5

    def test_merges_with_defaults(self, tmp_path: Path) -> None:
        """Should fill keys missing from an older settings file."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"steam_path": "/s"}))

        settings = SettingsManager(path)

        assert settings.steam_path == "/s"
        assert settings.request_timeout == 10.0

    def test_corrupt_file(self, tmp_path: Path) -> None:
        """Should fall back to defaults on invalid JSON."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        settings = SettingsManager(path)

        assert settings.steam_path == ""

    def test_non_object_file(self, tmp_path: Path) -> None:
        """Should ignore JSON that is not an object."""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")

        assert SettingsManager(path).steam_path == ""

    def test_bad_timeout_value(self, tmp_path: Path) -> None:
        """Should use the default timeout for unusable values."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"request_timeout": "soon"}))
        assert SettingsManager(path).request_timeout == 10.0

        path.write_text(json.dumps({"request_timeout": -1}))
        assert SettingsManager(path).request_timeout == 10.0

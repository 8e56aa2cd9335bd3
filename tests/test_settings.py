"""Tests for stored preferences."""

import json
from pathlib import Path

import pytest

from countdown.core.settings import ConfigError, Settings, default_config_dir


def _write_config(config_dir: Path, payload: str) -> None:
    (config_dir / "config.json").write_text(payload)


class TestSettingsLoad:
    """Settings.load() reads config.json or falls back to defaults."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = Settings.load(tmp_path)
        assert settings == Settings(minutes="0", seconds="0", alert="bell")

    def test_reads_values(self, tmp_path: Path) -> None:
        _write_config(tmp_path, json.dumps({"minutes": 25, "seconds": "", "alert": "silent"}))
        settings = Settings.load(tmp_path)
        assert settings.minutes == "25"
        assert settings.seconds == ""
        assert settings.alert == "silent"

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        _write_config(tmp_path, json.dumps({"theme": "dark"}))
        assert Settings.load(tmp_path) == Settings()

    def test_malformed_json_raises(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "{not json")
        with pytest.raises(ConfigError):
            Settings.load(tmp_path)

    def test_non_object_raises(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[1, 2]")
        with pytest.raises(ConfigError):
            Settings.load(tmp_path)

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_bytes(b'{"minutes": "\xff"}')
        with pytest.raises(ConfigError):
            Settings.load(tmp_path)

    def test_bad_alert_raises(self, tmp_path: Path) -> None:
        _write_config(tmp_path, json.dumps({"alert": "siren"}))
        with pytest.raises(ConfigError):
            Settings.load(tmp_path)

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COUNTDOWN_CONFIG_DIR", str(tmp_path))
        assert default_config_dir() == tmp_path


class TestSettingsSave:
    """Settings.save() persists preferences for the next load."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        settings = Settings()
        settings.set("minutes", "3")
        settings.set("alert", "silent")
        settings.save(tmp_path / "nested")
        assert Settings.load(tmp_path / "nested") == Settings(minutes="3", alert="silent")

    def test_set_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigError):
            Settings().set("volume", "11")

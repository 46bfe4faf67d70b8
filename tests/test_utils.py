from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from winplace.models import DEFAULT_SETTINGS
from winplace.utils import config_dir, load_settings, read_json, write_json


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path / "winplace"


def test_config_dir_follows_xdg(config_home: Path) -> None:
    assert config_dir() == config_home
    assert not config_home.exists()


def test_missing_settings_file_gives_defaults(config_home: Path) -> None:
    assert load_settings() is DEFAULT_SETTINGS


def test_settings_file_overrides_defaults(config_home: Path) -> None:
    write_json(config_home / "settings.json", {"move_step": 25, "screen_edge_gap": 6})

    settings = load_settings()

    assert settings.move_step == 25.0
    assert settings.screen_edge_gap == 6.0
    assert settings.size_step == DEFAULT_SETTINGS.size_step


def test_invalid_settings_fall_back_with_warning(config_home: Path, caplog: pytest.LogCaptureFixture) -> None:
    write_json(config_home / "settings.json", {"almost_maximize_width": 3})

    with caplog.at_level(logging.WARNING, logger="winplace.utils"):
        assert load_settings() is DEFAULT_SETTINGS

    assert "almost_maximize_width" in caplog.text


def test_explicit_settings_path(tmp_path: Path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"min_window_width": 320}))

    assert load_settings(path).min_window_width == 320.0


def test_read_json_tolerates_garbage(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json")

    assert read_json(path) is None
    assert read_json(tmp_path / "missing.json") is None

"""Utility helpers: XDG paths, file I/O, settings loading."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .models import DEFAULT_SETTINGS, CalculationSettings

log = logging.getLogger(__name__)

APP_NAME = "winplace"


def config_dir() -> Path:
    """Return ~/.config/winplace (not created; settings are only read)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_NAME


def state_dir() -> Path:
    """Return ~/.local/state/winplace, creating it if needed."""
    base = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    d = base / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def last_actions_dir() -> Path:
    """Return the last-action store subdirectory."""
    d = state_dir() / "last-actions"
    d.mkdir(parents=True, exist_ok=True)
    return d


def runtime_dir() -> Path:
    """Return $XDG_RUNTIME_DIR, where compositor sockets live."""
    return Path(os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}"))


def hyprland_runtime_dir() -> Path:
    """Return the Hyprland runtime directory for IPC sockets."""
    his = os.environ.get("HYPRLAND_INSTANCE_SIGNATURE", "")
    return runtime_dir() / "hypr" / his


def read_json(path: Path) -> dict | list | None:
    """Read and parse a JSON file, returning None on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def write_json(path: Path, data: dict | list) -> None:
    """Write data as formatted JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _settings_path() -> Path:
    """Return the path to the settings file."""
    return config_dir() / "settings.json"


def load_settings(path: Path | None = None) -> CalculationSettings:
    """Load calculation settings, falling back to defaults."""
    path = path or _settings_path()
    data = read_json(path)
    if not isinstance(data, dict):
        return DEFAULT_SETTINGS
    try:
        return CalculationSettings.from_dict(data)
    except (TypeError, ValueError) as e:
        log.warning("Ignoring invalid settings in %s: %s", path, e)
        return DEFAULT_SETTINGS

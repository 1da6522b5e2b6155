"""XDG path helpers for settings and runtime state."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "grrs"


def _user_dir(kind: str) -> Path:
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False, roaming=False)
    path = Path(dirs.user_config_path if kind == "config" else dirs.user_state_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_root() -> Path:
    return _user_dir("config")


def state_root() -> Path:
    return _user_dir("state")


def settings_path() -> Path:
    return config_root() / "settings.json"

from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_path, user_data_path, user_log_path

APP_NAME = "librarytui"


def config_root() -> Path:
    root = user_config_path(APP_NAME)
    root.mkdir(parents=True, exist_ok=True)
    return root


def config_path() -> Path:
    return config_root() / "config.json"


def default_plugin_dir() -> Path:
    return user_data_path(APP_NAME) / "plugins"


def log_dir() -> Path:
    path = user_log_path(APP_NAME)
    path.mkdir(parents=True, exist_ok=True)
    return path


def log_path() -> Path:
    return log_dir() / f"{APP_NAME}.log"

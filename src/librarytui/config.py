from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .library import SortStyle
from .paths import config_path

CONFIG_VERSION = 1


@dataclass
class AppConfig:
    version: int = CONFIG_VERSION
    output_dir: str | None = None
    plugin_path: str | None = None
    prefer_http: bool | None = None
    direct_json: bool | None = None
    sort_style: SortStyle | None = None
    max_workers: int | None = None


def load_config(path: Path | None = None) -> tuple[AppConfig, str | None]:
    """Read the JSON config file, falling back to defaults.

    Returns the config and an error message. Fields with the wrong type are
    ignored one by one instead of rejecting the whole file.
    """
    path = path or config_path()
    if not path.exists():
        return AppConfig(), None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        return AppConfig(), f"Failed to read config: {path} ({exc})"
    except json.JSONDecodeError:
        return AppConfig(), f"Config file is not valid JSON: {path}"
    if not isinstance(data, dict):
        return AppConfig(), f"Config file must be a JSON object: {path}"
    return AppConfig(
        version=_count(data.get("version")) or CONFIG_VERSION,
        output_dir=_text(data.get("output_dir")),
        plugin_path=_text(data.get("plugin_path")),
        prefer_http=_flag(data.get("prefer_http")),
        direct_json=_flag(data.get("direct_json")),
        sort_style=parse_sort_style(data.get("sort_style")),
        max_workers=_count(data.get("max_workers")),
    ), None


def parse_sort_style(value: Any) -> SortStyle | None:
    if not isinstance(value, str):
        return None
    key = value.strip().casefold()
    for style in SortStyle:
        if style.value == key:
            return style
    return None


def _text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _flag(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _count(value: Any) -> int | None:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value

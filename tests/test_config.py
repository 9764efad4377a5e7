from __future__ import annotations

import json

from librarytui.config import AppConfig, load_config, parse_sort_style
from librarytui.library import SortStyle


def test_load_config_missing_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    config, error = load_config(path)
    assert error is None
    assert config == AppConfig()


def test_load_config_reads_every_field(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "output_dir": " /srv/library ",
                "plugin_path": "/opt/plugins",
                "prefer_http": True,
                "direct_json": False,
                "sort_style": "Size",
                "max_workers": 4.0,
            }
        ),
        encoding="utf-8",
    )
    config, error = load_config(path)
    assert error is None
    assert config == AppConfig(
        output_dir="/srv/library",
        plugin_path="/opt/plugins",
        prefer_http=True,
        direct_json=False,
        sort_style=SortStyle.SIZE,
        max_workers=4,
    )


def test_load_config_invalid_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not-json", encoding="utf-8")
    config, error = load_config(path)
    assert config == AppConfig()
    assert error is not None


def test_load_config_requires_object(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    config, error = load_config(path)
    assert config == AppConfig()
    assert error is not None


def test_load_config_ignores_bad_types(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "output_dir": 12,
                "plugin_path": "  ",
                "prefer_http": "yes",
                "sort_style": "random",
                "max_workers": 0,
            }
        ),
        encoding="utf-8",
    )
    config, error = load_config(path)
    assert error is None
    assert config == AppConfig()


def test_parse_sort_style() -> None:
    assert parse_sort_style("Size") == SortStyle.SIZE
    assert parse_sort_style(" alphabetical ") == SortStyle.ALPHABETICAL
    assert parse_sort_style("newest") is None
    assert parse_sort_style(None) is None

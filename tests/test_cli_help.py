from __future__ import annotations

import sys

import pytest

from librarytui.app import _build_parser, _cli_help_text, _resolve_settings, main
from librarytui.config import AppConfig
from librarytui.library import SortStyle
from librarytui.paths import config_path


def test_cli_help_text_includes_config_path() -> None:
    text = _cli_help_text()
    assert "enter" in text
    assert str(config_path()) in text


def test_main_help_flag_prints_help(capsys, monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["librarytui", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 0
    captured = capsys.readouterr()
    assert "librarytui" in captured.out
    assert "--prefer-http" in captured.out


def test_flags_override_config() -> None:
    args = _build_parser().parse_args(["-o", "downloads", "-p", "--sort", "size"])
    config = AppConfig(output_dir="elsewhere", prefer_http=False, plugin_path="/plugins")
    settings = _resolve_settings(args, config)
    assert settings.output_dir == "downloads"
    assert settings.prefer_http is True
    assert settings.plugin_path == "/plugins"
    assert settings.sort_style == SortStyle.SIZE


def test_config_fills_missing_flags() -> None:
    args = _build_parser().parse_args([])
    config = AppConfig(direct_json=True, sort_style=SortStyle.ALPHABETICAL, max_workers=2)
    settings = _resolve_settings(args, config)
    assert settings.output_dir == "./library"
    assert settings.direct_json is True
    assert settings.prefer_http is False
    assert settings.sort_style == SortStyle.ALPHABETICAL
    assert settings.max_workers == 2

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable

from .library import DEFAULT_CAPABILITIES, ROOT_NAME, Capabilities, Category, Item
from .records import RecordError, parse_record_text

Runner = Callable[[list[str]], subprocess.CompletedProcess[str]]

logger = logging.getLogger(__name__)


class IngestError(RuntimeError):
    pass


def load_library(
    plugin_dir: Path,
    *,
    direct_json: bool = False,
    capabilities: Capabilities = DEFAULT_CAPABILITIES,
    runner: Runner | None = None,
    max_workers: int | None = None,
) -> Category:
    if not plugin_dir.exists():
        raise IngestError(f"Plugin path: {plugin_dir} does not exist!")
    if not plugin_dir.is_dir():
        raise IngestError(f"Plugin path: {plugin_dir} is not a directory")

    if direct_json:
        sources = find_json_sources(plugin_dir)
    else:
        sources = find_plugins(plugin_dir, is_windows=capabilities.is_windows)
    runner = runner or _run_subprocess

    def load(source: Path) -> list[Item]:
        if direct_json:
            text = _read_json_source(source)
        else:
            text = _run_plugin(source, runner)
        try:
            items = parse_record_text(text, capabilities, source=source.name)
        except RecordError as exc:
            raise IngestError(str(exc)) from exc
        logger.info("Loaded %d record(s) from %s", len(items), source)
        return items

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(load, sources))

    return build_library(item for items in results for item in items)


def build_library(items: Iterable[Item]) -> Category:
    root = Category(ROOT_NAME)
    for item in items:
        root.add(item)
    root.reset_cursors()
    root.set_enabled_recursive()
    return root


def find_plugins(plugin_dir: Path, *, is_windows: bool = False) -> list[Path]:
    plugins: list[Path] = []
    for path in sorted(plugin_dir.iterdir(), key=lambda entry: entry.name):
        if not path.is_file():
            continue
        suffix = path.suffix.lower()
        if is_windows and suffix != ".exe":
            continue
        if not is_windows and suffix:
            continue
        plugins.append(path)
    return plugins


def find_json_sources(plugin_dir: Path) -> list[Path]:
    return [
        path
        for path in sorted(plugin_dir.iterdir(), key=lambda entry: entry.name)
        if path.is_file() and path.suffix.lower() == ".json"
    ]


def _read_json_source(path: Path) -> str:
    logger.debug("Reading records from %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IngestError(f"Failed to read {path} ({exc})") from exc


def _run_plugin(path: Path, runner: Runner) -> str:
    logger.debug("Running plugin %s", path)
    try:
        completed = runner([str(path)])
    except OSError as exc:
        raise IngestError(f"Failed to run plugin {path.name} ({exc})") from exc
    if completed.returncode != 0:
        output = f"{completed.stdout or ''}{completed.stderr or ''}".strip()
        raise IngestError(
            f"Command: {path.name} failed with exit code {completed.returncode}: {output}"
        )
    return completed.stdout or ""


def _run_subprocess(command: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(command, check=False, capture_output=True, text=True)

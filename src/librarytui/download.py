from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Callable, Optional
from urllib.parse import unquote, urlparse

import httpx
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from .library import Capabilities, Category, Document, DownloadMethod

Runner = Callable[[list[str]], subprocess.CompletedProcess[str]]
ProgressCallback = Callable[[int, Optional[int]], None]

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/117.0"
_CHUNK_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


class DownloadStatus(Enum):
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DownloadTarget:
    document: Document
    directory: PurePath

    @property
    def relative_path(self) -> PurePath:
        return self.directory / self.document.name


@dataclass(frozen=True)
class DownloadResult:
    target: DownloadTarget
    status: DownloadStatus
    output_path: Path | None
    error: str | None = None


def build_download_plan(root: Category) -> list[DownloadTarget]:
    return [
        DownloadTarget(document=document, directory=PurePath(*parents))
        for parents, document in root.walk_enabled_documents()
    ]


def choose_method(
    document: Document, capabilities: Capabilities, prefer_http: bool = False
) -> DownloadMethod:
    if document.method == DownloadMethod.EITHER:
        if prefer_http or not capabilities.rsync_supported:
            return DownloadMethod.HTTP
        return DownloadMethod.RSYNC
    return document.method


def setup_folder(path: Path) -> None:
    if path.exists():
        if not path.is_dir():
            raise FileExistsError(f"Cannot create {path} folder as a file exists in its place")
        return
    path.mkdir(parents=True)


def http_file_name(document: Document) -> str:
    name = PurePath(unquote(urlparse(document.url).path)).name
    return name or document.name


def normalize_rsync_url(url: str) -> str:
    if url.startswith("http://"):
        url = url[len("http://") :]
    if not url.startswith("rsync://"):
        url = f"rsync://{url}"
    return url


def build_rsync_command(url: str, destination: Path) -> list[str]:
    return [
        "rsync",
        "-rlptH",
        "--safe-links",
        "--delete-delay",
        "--delay-updates",
        "--no-motd",
        "--progress",
        "-h",
        normalize_rsync_url(url),
        str(destination),
    ]


def create_client() -> httpx.Client:
    return httpx.Client(
        follow_redirects=True,
        timeout=httpx.Timeout(30.0, read=None),
        headers={"User-Agent": USER_AGENT},
    )


def download_http(
    url: str,
    path: Path,
    client: httpx.Client,
    on_progress: ProgressCallback | None = None,
) -> DownloadStatus:
    if path.exists():
        if path.is_dir():
            raise IsADirectoryError(f"Cant download file {path}, as a folder exists in its place")
        return DownloadStatus.SKIPPED

    partial = path.with_name(f"{path.name}.part")
    with client.stream("GET", url) as response:
        response.raise_for_status()
        total = _content_length(response)
        downloaded = 0
        with partial.open("wb") as handle:
            for chunk in response.iter_bytes(_CHUNK_SIZE):
                handle.write(chunk)
                downloaded += len(chunk)
                if on_progress is not None:
                    on_progress(downloaded, total)
    partial.replace(path)
    return DownloadStatus.DONE


def download_rsync(url: str, destination: Path, runner: Runner | None = None) -> None:
    runner = runner or _run_subprocess
    command = build_rsync_command(url, destination)
    try:
        completed = runner(command)
    except FileNotFoundError as exc:
        raise RuntimeError("rsync not found on PATH") from exc
    if completed.returncode != 0:
        raise RuntimeError(_summarize_error(completed))


def download_target(
    target: DownloadTarget,
    out_dir: Path,
    *,
    capabilities: Capabilities,
    prefer_http: bool = False,
    client: httpx.Client | None = None,
    runner: Runner | None = None,
    on_progress: ProgressCallback | None = None,
) -> DownloadResult:
    document = target.document
    directory = out_dir / target.directory
    method = choose_method(document, capabilities, prefer_http)
    try:
        setup_folder(directory)
        if method == DownloadMethod.RSYNC:
            output_path = directory / document.name
            download_rsync(document.url, output_path, runner)
            status = DownloadStatus.DONE
        else:
            output_path = directory / http_file_name(document)
            owned = client is None
            client = client or create_client()
            try:
                status = download_http(document.url, output_path, client, on_progress)
            finally:
                if owned:
                    client.close()
    except httpx.HTTPError as exc:
        return _failed(target, f"Failed to GET from '{document.url}' ({exc})")
    except (OSError, RuntimeError) as exc:
        return _failed(target, str(exc))
    return DownloadResult(target=target, status=status, output_path=output_path)


def run_downloads(
    plan: list[DownloadTarget],
    out_dir: Path,
    *,
    capabilities: Capabilities,
    prefer_http: bool = False,
    console: Console | None = None,
    client: httpx.Client | None = None,
    runner: Runner | None = None,
) -> list[DownloadResult]:
    console = console or Console()
    setup_folder(out_dir)
    owned = client is None
    client = client or create_client()
    results: list[DownloadResult] = []
    try:
        for target in plan:
            method = choose_method(target.document, capabilities, prefer_http)
            if method == DownloadMethod.RSYNC:
                console.print(f"Starting Download: {target.document.url}", markup=False)
                result = download_target(
                    target,
                    out_dir,
                    capabilities=capabilities,
                    prefer_http=prefer_http,
                    runner=runner,
                )
            else:
                result = _download_with_progress(
                    target, out_dir, capabilities, prefer_http, console, client
                )
            _report(console, result)
            results.append(result)
    finally:
        if owned:
            client.close()
    return results


def _download_with_progress(
    target: DownloadTarget,
    out_dir: Path,
    capabilities: Capabilities,
    prefer_http: bool,
    console: Console,
    client: httpx.Client,
) -> DownloadResult:
    with Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        description = escape(str(target.relative_path))
        task_id = progress.add_task(description, total=target.document.size or None)

        def on_progress(downloaded: int, total: int | None) -> None:
            progress.update(task_id, completed=downloaded, total=total)

        return download_target(
            target,
            out_dir,
            capabilities=capabilities,
            prefer_http=prefer_http,
            client=client,
            on_progress=on_progress,
        )


def _report(console: Console, result: DownloadResult) -> None:
    path = result.target.relative_path
    if result.status == DownloadStatus.FAILED:
        logger.error("Download failed for %s: %s", path, result.error)
        message = f"[red]Failed[/red] {escape(str(path))}: {escape(result.error or '')}"
        console.print(message, highlight=False)
    elif result.status == DownloadStatus.SKIPPED:
        logger.info("Skipped %s, %s already exists", path, result.output_path)
        console.print(f"Skipped {path} (already downloaded)", markup=False, highlight=False)
    else:
        logger.info("Downloaded %s to %s", result.target.document.url, result.output_path)
        console.print(f"Completed Download: {path}", markup=False, highlight=False)


def _failed(target: DownloadTarget, error: str) -> DownloadResult:
    return DownloadResult(
        target=target,
        status=DownloadStatus.FAILED,
        output_path=None,
        error=error,
    )


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("Content-Length")
    if value is None or not value.isdigit():
        return None
    return int(value)


def _run_subprocess(command: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(command, check=False, text=True)


def _summarize_error(completed: subprocess.CompletedProcess[str]) -> str:
    stderr = completed.stderr or ""
    stdout = completed.stdout or ""
    message = stderr.strip() or stdout.strip()
    if not message:
        return f"rsync failed with exit code {completed.returncode}"
    return message.splitlines()[-1]

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.theme import Theme
from textual.widgets import Label, ListView, Static

from .config import AppConfig, load_config, parse_sort_style
from .download import DownloadStatus, build_download_plan, run_downloads
from .ingest import IngestError, load_library
from .library import Capabilities, Category, Document, SortStyle
from .log import configure_logging
from .navigator import Navigator
from .paths import config_path, default_plugin_dir
from .sizes import format_size
from .ui.library_list import LibraryListItem
from .ui.screens import ConfirmDownloadScreen, HelpScreen

DEFAULT_OUT_PATH = "./library"
TIP_TEXT = "Tip: press ? for help, space to toggle, enter to download"
HELP_TEXT = """Keyboard shortcuts
up/k  previous item
down/j  next item
left/h  back one level
right/l  open highlighted category
home/g  first item
end/G  last item
space  toggle highlighted item
tab  toggle every item in this list
s  sort this list by name
S  sort this list by selected size
ctrl+s  sort the whole library by name
enter  download the selection
?  help
q/escape  quit without downloading

Lists marked with round buttons allow only one choice.
Dimmed items are not selected; struck-through items cannot
be downloaded on this system.
"""

TOKYO_NIGHT_THEME = Theme(
    name="tokyo-night",
    primary="#7aa2f7",
    secondary="#7dcfff",
    accent="#bb9af7",
    warning="#e0af68",
    error="#f7768e",
    success="#9ece6a",
    foreground="#c0caf5",
    background="#1a1b26",
    surface="#1f2335",
    panel="#24283b",
    boost="#2f334d",
    variables={
        "block-cursor-background": "#7aa2f7",
        "block-cursor-foreground": "#1a1b26",
        "block-cursor-blurred-background": "#7aa2f7 60%",
        "footer-key-foreground": "#7aa2f7",
        "button-color-foreground": "#1a1b26",
        "button-focus-text-style": "bold",
    },
)

logger = logging.getLogger(__name__)

_LIST_ACTIONS = {
    "cancel",
    "previous",
    "next",
    "left",
    "right",
    "home",
    "end",
    "toggle",
    "toggle_all",
    "sort",
    "sort_all",
    "download",
}


class PaneList(ListView):
    can_focus = False


class LibraryApp(App[bool]):
    BINDINGS = [
        ("q,escape", "cancel", "Quit"),
        ("up,k", "previous", "Up"),
        ("down,j", "next", "Down"),
        ("left,h", "left", "Back"),
        ("right,l", "right", "Open"),
        ("home,g", "home", "Top"),
        ("end,G", "end", "Bottom"),
        ("space", "toggle", "Toggle"),
        Binding("tab", "toggle_all", "Toggle All", priority=True),
        ("s", "sort('alphabetical')", "Sort Name"),
        ("S", "sort('size')", "Sort Size"),
        ("ctrl+s", "sort_all('alphabetical')", "Sort All"),
        ("enter", "download", "Download"),
        ("?", "help", "Help"),
    ]

    CSS = """
    Screen {
        background: $background;
        color: $text;
    }

    #root {
        height: 100%;
    }

    #breadcrumb {
        padding: 0 2;
        color: $secondary;
    }

    #main {
        height: 1fr;
        padding: 0 1;
    }

    #left, #right {
        padding: 0 1;
        background: $surface;
    }

    #left {
        width: 50%;
        border: round $primary;
    }

    #right {
        width: 50%;
        border: round $accent;
        background: $panel;
    }

    #current_list, #child_list {
        height: 1fr;
        background: transparent;
    }

    #detail {
        height: auto;
        color: $text-muted;
    }

    #status_bar {
        padding: 0 2;
        color: $success;
    }

    #tip_bar {
        padding: 0 2;
        color: $text-muted;
    }
    """

    def __init__(self, library: Category, out_dir: Path | None = None) -> None:
        super().__init__()
        self.register_theme(TOKYO_NIGHT_THEME)
        self.theme = TOKYO_NIGHT_THEME.name
        self.navigator = Navigator(library)
        self.out_dir = out_dir or Path(DEFAULT_OUT_PATH)
        self._breadcrumb: Label | None = None
        self._current_list: PaneList | None = None
        self._child_list: PaneList | None = None
        self._detail: Static | None = None
        self._status_bar: Label | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            yield Label("", id="breadcrumb")
            with Horizontal(id="main"):
                with Vertical(id="left"):
                    yield PaneList(id="current_list")
                with Vertical(id="right"):
                    yield PaneList(id="child_list")
                    yield Static("", id="detail", markup=False)
            yield Label("", id="status_bar")
            yield Static(TIP_TEXT, id="tip_bar")

    async def on_mount(self) -> None:
        self._breadcrumb = self.query_one("#breadcrumb", Label)
        self._current_list = self.query_one("#current_list", PaneList)
        self._child_list = self.query_one("#child_list", PaneList)
        self._detail = self.query_one("#detail", Static)
        self._status_bar = self.query_one("#status_bar", Label)
        await self._refresh_panes()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if isinstance(self.screen, ModalScreen) and action in _LIST_ACTIONS:
            return False
        return True

    def action_help(self) -> None:
        self.push_screen(HelpScreen(HELP_TEXT))

    def action_cancel(self) -> None:
        self.exit(False)

    async def action_previous(self) -> None:
        self.navigator.previous()
        await self._refresh_panes()

    async def action_next(self) -> None:
        self.navigator.next()
        await self._refresh_panes()

    async def action_left(self) -> None:
        self.navigator.left()
        await self._refresh_panes()

    async def action_right(self) -> None:
        self.navigator.right()
        await self._refresh_panes()

    async def action_home(self) -> None:
        self.navigator.home()
        await self._refresh_panes()

    async def action_end(self) -> None:
        self.navigator.end()
        await self._refresh_panes()

    async def action_toggle(self) -> None:
        self.navigator.toggle()
        await self._refresh_panes()

    async def action_toggle_all(self) -> None:
        self.navigator.toggle_all()
        await self._refresh_panes()

    async def action_sort(self, style: str) -> None:
        self.navigator.sort(parse_sort_style(style) or SortStyle.ALPHABETICAL)
        await self._refresh_panes()

    async def action_sort_all(self, style: str) -> None:
        self.navigator.sort(parse_sort_style(style) or SortStyle.ALPHABETICAL, recursive=True)
        await self._refresh_panes()

    def action_download(self) -> None:
        plan = build_download_plan(self.navigator.root)
        self.push_screen(
            ConfirmDownloadScreen(len(plan), self.navigator.selected_size(), self.out_dir),
            self._handle_download_confirm,
        )

    def _handle_download_confirm(self, confirmed: bool | None) -> None:
        if confirmed:
            self.exit(True)

    async def _refresh_panes(self) -> None:
        current, preview = self.navigator.panes()
        if self._breadcrumb is not None:
            self._breadcrumb.update(" / ".join(self.navigator.breadcrumb()))
        if self._current_list is not None:
            await _fill_list(self._current_list, current)
        if self._child_list is not None:
            await _fill_list(self._child_list, preview)
        if self._detail is not None:
            self._detail.update(_format_detail(current))
        self._update_status()

    def _update_status(self) -> None:
        if self._status_bar is None:
            return
        total = format_size(self.navigator.selected_size())
        self._status_bar.update(f"Selected: {total}  Output: {self.out_dir}")


async def _fill_list(list_view: PaneList, category: Category | None) -> None:
    await list_view.clear()
    if category is None or not category.items:
        return
    await list_view.extend(
        LibraryListItem(item, radio=category.single_selection) for item in category.items
    )
    list_view.index = category.cursor.selected()


def _format_detail(category: Category) -> str:
    if not category.items:
        return "This category is empty."
    item = category.selected_item()
    if not isinstance(item, Document):
        return ""
    lines = [
        item.name,
        f"Size: {format_size(item.size)}",
        f"Method: {item.method.value}",
        item.url,
    ]
    if not item.can_download():
        lines.append("Not downloadable on this system.")
    return "\n".join(lines)


def _cli_help_text() -> str:
    return (
        "Browse a catalog of downloadable items, pick what you want, "
        "then press enter to download it.\n\n"
        f"Config file: {config_path()}\n"
        f"Default plugin directory: {default_plugin_dir()}"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="librarytui",
        description=_cli_help_text(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-o", "--out-path", help="Path to output the downloaded content")
    parser.add_argument(
        "-p",
        "--prefer-http",
        action="store_true",
        default=None,
        help="Use HTTP for items that offer both HTTP and rsync",
    )
    parser.add_argument("--plugin-path", help="Directory holding plugin executables or JSON files")
    parser.add_argument(
        "-d",
        "--direct-json",
        action="store_true",
        default=None,
        help="Read .json record files instead of running plugins",
    )
    parser.add_argument(
        "--sort",
        choices=[style.value for style in SortStyle],
        help="Initial sort order for every list",
    )
    parser.add_argument("--debug", action="store_true", help="Write debug output to the log file")
    return parser


def _resolve_settings(args: argparse.Namespace, config: AppConfig) -> AppConfig:
    return AppConfig(
        version=config.version,
        output_dir=args.out_path or config.output_dir or DEFAULT_OUT_PATH,
        plugin_path=args.plugin_path or config.plugin_path or str(default_plugin_dir()),
        prefer_http=bool(args.prefer_http if args.prefer_http is not None else config.prefer_http),
        direct_json=bool(args.direct_json if args.direct_json is not None else config.direct_json),
        sort_style=parse_sort_style(args.sort) or config.sort_style,
        max_workers=config.max_workers,
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    log_file = configure_logging(logging.DEBUG if args.debug else logging.INFO)
    config, config_error = load_config()
    if config_error:
        logger.warning(config_error)
    settings = _resolve_settings(args, config)
    capabilities = Capabilities.detect()
    logger.info(
        "Starting with plugin path %s (rsync supported: %s)",
        settings.plugin_path,
        capabilities.rsync_supported,
    )

    try:
        library = load_library(
            Path(settings.plugin_path).expanduser(),
            direct_json=bool(settings.direct_json),
            capabilities=capabilities,
            max_workers=settings.max_workers,
        )
    except IngestError as exc:
        logger.error("Failed to load library: %s", exc)
        parser.error(str(exc))
    if not library.items:
        parser.error(f"No library items found in {settings.plugin_path}")
    if settings.sort_style is not None:
        library.sort(settings.sort_style, recursive=True)

    out_dir = Path(settings.output_dir or DEFAULT_OUT_PATH).expanduser()
    app = LibraryApp(library, out_dir=out_dir)
    if not app.run():
        return

    console = Console()
    plan = build_download_plan(library)
    results = run_downloads(
        plan,
        out_dir,
        capabilities=capabilities,
        prefer_http=bool(settings.prefer_http),
        console=console,
    )
    failed = [result for result in results if result.status == DownloadStatus.FAILED]
    if failed:
        console.print(
            f"{len(failed)} of {len(results)} downloads failed, see {log_file}",
            markup=False,
        )
        sys.exit(1)

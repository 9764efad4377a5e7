from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ..sizes import format_size


class HelpScreen(ModalScreen[None]):
    BINDINGS = [("escape,q,?", "close", "Close")]

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help_dialog {
        width: 60;
        height: auto;
        max-height: 80%;
        padding: 1 2;
        border: round $primary;
        background: $panel;
    }

    #help_hint {
        color: $text-muted;
    }
    """

    def __init__(self, help_text: str) -> None:
        super().__init__()
        self._help_text = help_text

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help_dialog"):
            yield Static(self._help_text, markup=False)
            yield Label("escape closes this window", id="help_hint")

    def action_close(self) -> None:
        self.dismiss(None)


class ConfirmDownloadScreen(ModalScreen[bool]):
    BINDINGS = [("escape", "cancel", "Cancel"), ("enter", "confirm", "Download")]

    CSS = """
    ConfirmDownloadScreen {
        align: center middle;
        background: $surface 80%;
    }

    #confirm_dialog {
        width: 70%;
        max-width: 80;
        height: auto;
        padding: 1 2;
        border: heavy $accent;
        background: $panel;
    }

    #confirm_text {
        margin: 1 0;
    }
    """

    def __init__(self, item_count: int, total_size: int, out_dir: Path) -> None:
        super().__init__()
        self._item_count = item_count
        self._total_size = total_size
        self._out_dir = out_dir

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm_dialog"):
            yield Label("Start download?")
            yield Static(
                format_download_summary(self._item_count, self._total_size, self._out_dir),
                id="confirm_text",
                markup=False,
            )
            with Horizontal():
                yield Button("Download", id="confirm_download", variant="primary")
                yield Button("Cancel", id="confirm_cancel")

    def action_cancel(self) -> None:
        self.dismiss(False)

    def action_confirm(self) -> None:
        self.dismiss(self._item_count > 0)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm_cancel":
            self.dismiss(False)
        elif event.button.id == "confirm_download":
            self.action_confirm()


def format_download_summary(item_count: int, total_size: int, out_dir: Path) -> str:
    if item_count == 0:
        return "Nothing is selected for download."
    noun = "item" if item_count == 1 else "items"
    return f"{item_count} {noun}, {format_size(total_size)}\nDestination: {out_dir}"

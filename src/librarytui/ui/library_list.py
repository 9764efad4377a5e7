from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual.widgets import Label, ListItem

from ..library import Category, Item
from ..sizes import format_size

_CATEGORY_TEXT_STYLE = "#7dcfff"
_CATEGORY_ICON_STYLE = "#7dcfff"
_DOCUMENT_TEXT_STYLE = "#c0caf5"
_DOCUMENT_ICON_STYLE = "#a9b1d6"
_SIZE_STYLE = "#9ece6a"
_CHECK_STYLE = "#9ece6a"
_UNCHECKED_STYLE = "#565f89"
_SINGLE_SELECTION_STYLE = "#bb9af7"

_FOLDER_ICON = "\uf07b"
_FILE_ICON = "\uf0f6"
_CHECKED_ICON = "\uf14a"
_UNCHECKED_ICON = "\uf096"
_RADIO_ON_ICON = "\uf192"
_RADIO_OFF_ICON = "\uf10c"


@dataclass(frozen=True)
class ItemDisplay:
    name: str
    size: str
    enabled: bool
    dim: bool
    strike: bool
    is_category: bool


def describe_item(item: Item) -> ItemDisplay:
    is_category = isinstance(item, Category)
    if is_category:
        size = sum(child.total_size(True) for child in item.items)
    else:
        size = item.size
    return ItemDisplay(
        name=item.name,
        size=format_size(size),
        enabled=item.enabled,
        dim=not item.enabled,
        strike=not item.can_download(),
        is_category=is_category,
    )


def format_item_label(display: ItemDisplay, *, radio: bool = False) -> Text:
    if radio:
        check = _RADIO_ON_ICON if display.enabled else _RADIO_OFF_ICON
    else:
        check = _CHECKED_ICON if display.enabled else _UNCHECKED_ICON
    if display.enabled:
        check_style = _SINGLE_SELECTION_STYLE if radio else _CHECK_STYLE
    else:
        check_style = _UNCHECKED_STYLE
    icon = _FOLDER_ICON if display.is_category else _FILE_ICON
    icon_style = _CATEGORY_ICON_STYLE if display.is_category else _DOCUMENT_ICON_STYLE
    text_style = _CATEGORY_TEXT_STYLE if display.is_category else _DOCUMENT_TEXT_STYLE

    label = Text(no_wrap=True, overflow="ellipsis")
    label.append(check, style=check_style)
    label.append(" ")
    label.append(icon, style=icon_style)
    label.append(" ")
    label.append(display.name, style=text_style)
    label.append("  ")
    label.append(display.size, style=_SIZE_STYLE)
    if display.dim:
        label.stylize("dim")
    if display.strike:
        label.stylize("strike")
    return label


class LibraryListItem(ListItem):
    def __init__(self, item: Item, *, radio: bool = False) -> None:
        self.item = item
        self.item_display = describe_item(item)
        super().__init__(Label(format_item_label(self.item_display, radio=radio)))

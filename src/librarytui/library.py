from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

from .cursor import ListCursor

ROOT_NAME = "Apocalypse Library"


class DownloadMethod(Enum):
    HTTP = "Http"
    RSYNC = "Rsync"
    EITHER = "Either"


class SortStyle(Enum):
    ALPHABETICAL = "alphabetical"
    SIZE = "size"


@dataclass(frozen=True)
class Capabilities:
    is_windows: bool = False
    has_rsync: bool = True

    @property
    def rsync_supported(self) -> bool:
        return self.has_rsync and not self.is_windows

    @classmethod
    def detect(cls) -> Capabilities:
        return cls(is_windows=os.name == "nt", has_rsync=shutil.which("rsync") is not None)


DEFAULT_CAPABILITIES = Capabilities()


@dataclass
class Document:
    name: str
    url: str
    size: int
    method: DownloadMethod = DownloadMethod.HTTP
    capabilities: Capabilities = field(default=DEFAULT_CAPABILITIES, repr=False)
    enabled: bool = field(init=False)

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"Negative size for {self.name!r}: {self.size}")
        self.enabled = self.can_download()

    def can_download(self) -> bool:
        if self.method == DownloadMethod.RSYNC:
            return self.capabilities.rsync_supported
        return True

    def set_enabled(self, enabled: bool) -> bool:
        self.enabled = enabled and self.can_download()
        return self.enabled

    def total_size(self, enabled_only: bool = False) -> int:
        if enabled_only and not self.enabled:
            return 0
        return self.size


class Category:
    """A named group of library items.

    Children keep their display order. ``cursor`` tracks the highlighted
    child and is rebuilt whenever the number of children changes.
    """

    def __init__(
        self,
        name: str,
        items: list[Item] | None = None,
        single_selection: bool = False,
    ) -> None:
        self.name = name
        self.items: list[Item] = list(items or [])
        self._single_selection = single_selection
        if single_selection:
            _keep_first_enabled(self.items)
        self.enabled = self.can_download()
        self.cursor = ListCursor(len(self.items))

    def __repr__(self) -> str:
        return (
            f"Category(name={self.name!r}, items={len(self.items)}, "
            f"single_selection={self._single_selection}, enabled={self.enabled})"
        )

    @property
    def single_selection(self) -> bool:
        return self._single_selection

    def can_download(self) -> bool:
        return any(item.can_download() for item in self.items)

    def set_enabled(self, enabled: bool) -> bool:
        self.enabled = enabled and self.can_download()
        return self.enabled

    def total_size(self, enabled_only: bool = False) -> int:
        if enabled_only:
            return self.enabled_size()
        return sum(item.total_size(False) for item in self.items)

    def enabled_size(self) -> int:
        if not self.enabled:
            return 0
        return sum(item.total_size(True) for item in self.items)

    def is_last(self) -> bool:
        return all(isinstance(item, Document) for item in self.items)

    def selected_item(self) -> Item:
        assert self.items, f"category {self.name!r} is empty"
        return self.items[self.cursor.selected()]

    def find_category(self, name: str) -> Category | None:
        key = name.casefold()
        for item in self.items:
            if isinstance(item, Category) and item.name.casefold() == key:
                return item
        return None

    def add(self, item: Item) -> None:
        if isinstance(item, Category):
            if not item.items:
                return
            existing = self.find_category(item.name)
            if existing is not None:
                # existing node keeps its own single_selection policy
                for child in item.items:
                    existing.add(child)
                self.enabled = self.can_download()
                return
        if self._single_selection and self.items:
            item.set_enabled(False)
        self.items.append(item)
        self.enabled = self.can_download()
        self.cursor = ListCursor(len(self.items))

    def reset_cursors(self) -> None:
        self.cursor = ListCursor(len(self.items))
        for item in self.items:
            if isinstance(item, Category):
                item.reset_cursors()

    def set_enabled_recursive(self) -> None:
        if self._single_selection:
            return
        for item in self.items:
            item.set_enabled(item.can_download())
            if isinstance(item, Category) and not item.single_selection:
                item.set_enabled_recursive()

    def toggle_selected_item(self) -> None:
        index = self.cursor.selected()
        item = self.items[index]
        if not self._single_selection:
            item.set_enabled(not item.enabled)
            return
        if not item.enabled and item.can_download():
            for sibling in self.items:
                sibling.set_enabled(False)
            item.set_enabled(True)
        elif item.enabled:
            item.set_enabled(False)
            for position, sibling in enumerate(self.items):
                if position != index and sibling.set_enabled(True):
                    break

    def toggle_all_items(self) -> None:
        if self._single_selection:
            return
        for item in self.items:
            item.set_enabled(not item.enabled)

    def get_selected_category(self, depth: int) -> tuple[Category, int]:
        """Resolve ``depth`` levels down the chain of highlighted categories.

        Returns the addressed category and the depth left over. A non-zero
        remainder means ``depth`` overshot the nesting under the cursor.
        """
        if depth == 0 or self.is_last():
            return (self, depth)
        child = self.selected_item()
        if isinstance(child, Category):
            assert child.items, f"category {child.name!r} is empty"
            return child.get_selected_category(depth - 1)
        return (self, depth + 1)

    def sort(self, style: SortStyle, *, recursive: bool = False) -> None:
        previous_item = None
        if self.items and self.cursor.selected() != 0:
            previous_item = self.items[self.cursor.selected()]
        if style == SortStyle.SIZE:
            self.items.sort(key=lambda item: item.total_size(True), reverse=True)
        else:
            self.items.sort(key=lambda item: item.name.casefold())
        if previous_item is not None:
            for index, item in enumerate(self.items):
                if item is previous_item:
                    self.cursor.set_selected(index)
                    break
        if recursive:
            for item in self.items:
                if isinstance(item, Category):
                    item.sort(style, recursive=True)

    def walk_enabled_documents(
        self, parents: tuple[str, ...] = ()
    ) -> Iterator[tuple[tuple[str, ...], Document]]:
        for item in self.items:
            if not item.enabled:
                continue
            if isinstance(item, Category):
                yield from item.walk_enabled_documents(parents + (item.name,))
            else:
                yield (parents, item)


Item = Union[Document, Category]


def _keep_first_enabled(items: list[Item]) -> None:
    found = False
    for item in items:
        if found:
            item.set_enabled(False)
        elif item.enabled and item.can_download():
            found = True

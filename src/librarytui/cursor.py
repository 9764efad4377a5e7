from __future__ import annotations


class ListCursor:
    """Highlighted-child index for one category's list of items."""

    def __init__(self, size: int = 0) -> None:
        self._size = size
        self._selected: int | None = None

    def __repr__(self) -> str:
        return f"ListCursor(size={self._size}, selected={self._selected})"

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_set(self) -> bool:
        return self._selected is not None

    def selected(self) -> int:
        if self._selected is None:
            self._selected = 0
        return self._selected

    def set_selected(self, index: int) -> None:
        assert self._size > 0, "cursor on an empty list"
        self._selected = max(0, min(self._size - 1, index))

    def next(self) -> None:
        assert self._size > 0, "cursor on an empty list"
        current = self.selected()
        self._selected = 0 if current >= self._size - 1 else current + 1

    def previous(self) -> None:
        assert self._size > 0, "cursor on an empty list"
        current = self.selected()
        self._selected = self._size - 1 if current == 0 else current - 1

    def first(self) -> None:
        self.set_selected(0)

    def last(self) -> None:
        self.set_selected(self._size - 1)

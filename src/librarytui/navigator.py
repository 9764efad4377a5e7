from __future__ import annotations

from .library import Category, SortStyle


class Navigator:
    """Tracks how many panes the user has drilled into.

    ``depth`` counts "right" moves from the root. The tree's nesting varies
    per branch, so every move re-resolves the depth against the live cursor
    chain and steps it back until it lands on a real category.
    """

    def __init__(self, root: Category) -> None:
        self.root = root
        self.depth = 0

    def current(self) -> Category:
        category, remainder = self.root.get_selected_category(self.depth)
        while remainder and self.depth > 0:
            self.depth -= 1
            category, remainder = self.root.get_selected_category(self.depth)
        return category

    def panes(self) -> tuple[Category, Category | None]:
        category = self.current()
        if not category.items:
            return (category, None)
        highlighted = category.selected_item()
        if isinstance(highlighted, Category):
            return (category, highlighted)
        return (category, None)

    def breadcrumb(self) -> list[str]:
        self.current()
        names = [self.root.name]
        category = self.root
        for _ in range(self.depth):
            child = category.selected_item()
            if not isinstance(child, Category):
                break
            category = child
            names.append(category.name)
        return names

    def selected_size(self) -> int:
        return self.root.enabled_size()

    def left(self) -> None:
        self.depth = max(0, self.depth - 1)
        self.current()

    def right(self) -> None:
        _, preview = self.panes()
        if preview is None or not preview.items:
            return
        self.depth += 1
        self.current()

    def next(self) -> None:
        category = self.current()
        if category.items:
            category.cursor.next()

    def previous(self) -> None:
        category = self.current()
        if category.items:
            category.cursor.previous()

    def home(self) -> None:
        category = self.current()
        if category.items:
            category.cursor.first()

    def end(self) -> None:
        category = self.current()
        if category.items:
            category.cursor.last()

    def toggle(self) -> None:
        category = self.current()
        if category.items:
            category.toggle_selected_item()

    def toggle_all(self) -> None:
        self.current().toggle_all_items()

    def sort(self, style: SortStyle, *, recursive: bool = False) -> None:
        if recursive:
            self.root.sort(style, recursive=True)
        else:
            self.current().sort(style)
        self.current()

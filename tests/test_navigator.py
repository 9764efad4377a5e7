from __future__ import annotations

from librarytui.library import Category, Document, SortStyle
from librarytui.navigator import Navigator


def doc(name: str, size: int = 10) -> Document:
    return Document(name=name, url=f"https://example.com/{name}", size=size)


def build_tree() -> tuple[Category, dict[str, Category]]:
    europe = Category("Europe", [doc("france", 30), doc("spain", 20)])
    asia = Category("Asia", [doc("japan", 5)])
    maps = Category("Maps", [europe, asia, doc("world", 100)])
    books = Category("Books", [doc("novel", 1), doc("atlas", 2)])
    root = Category("Root", [maps, books])
    return root, {"europe": europe, "asia": asia, "maps": maps, "books": books}


def test_starts_at_root() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    current, preview = navigator.panes()
    assert current is root
    assert preview is nodes["maps"]
    assert navigator.breadcrumb() == ["Root"]


def test_right_and_left_move_between_levels() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.right()
    assert navigator.current() is nodes["maps"]
    navigator.right()
    assert navigator.current() is nodes["europe"]
    assert navigator.depth == 2
    assert navigator.breadcrumb() == ["Root", "Maps", "Europe"]
    navigator.left()
    assert navigator.current() is nodes["maps"]
    navigator.left()
    navigator.left()
    assert navigator.depth == 0
    assert navigator.current() is root


def test_right_stops_at_documents() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.right()
    navigator.right()
    navigator.right()
    assert navigator.depth == 2
    assert navigator.current() is nodes["europe"]


def test_right_on_document_is_noop() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.right()
    navigator.end()
    navigator.right()
    assert navigator.depth == 1
    assert navigator.current() is nodes["maps"]
    assert navigator.panes() == (nodes["maps"], None)


def test_depth_self_corrects_when_branch_changes() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.right()
    navigator.right()
    assert navigator.current() is nodes["europe"]
    nodes["maps"].cursor.last()
    assert navigator.current() is nodes["maps"]
    assert navigator.depth == 1


def test_next_and_previous_move_current_cursor() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.next()
    assert navigator.panes() == (root, nodes["books"])
    navigator.next()
    assert navigator.panes() == (root, nodes["maps"])
    navigator.previous()
    assert navigator.panes() == (root, nodes["books"])
    navigator.home()
    assert root.cursor.selected() == 0


def test_toggle_changes_selected_size() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    assert navigator.selected_size() == 158
    navigator.toggle()
    assert not nodes["maps"].enabled
    assert navigator.selected_size() == 3
    navigator.toggle()
    assert navigator.selected_size() == 158


def test_toggle_all_in_current_category() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.next()
    navigator.right()
    navigator.toggle_all()
    assert [item.enabled for item in nodes["books"].items] == [False, False]
    assert navigator.selected_size() == 155


def test_sort_current_category_tracks_cursor() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.next()
    navigator.right()
    navigator.next()
    navigator.sort(SortStyle.ALPHABETICAL)
    books = nodes["books"]
    assert [item.name for item in books.items] == ["atlas", "novel"]
    assert books.selected_item().name == "atlas"


def test_sort_recursive_sorts_whole_tree() -> None:
    root, nodes = build_tree()
    navigator = Navigator(root)
    navigator.sort(SortStyle.ALPHABETICAL, recursive=True)
    assert [item.name for item in root.items] == ["Books", "Maps"]
    assert [item.name for item in nodes["maps"].items] == ["Asia", "Europe", "world"]


def test_empty_root_is_safe() -> None:
    root = Category("Root")
    navigator = Navigator(root)
    navigator.next()
    navigator.right()
    navigator.toggle()
    assert navigator.panes() == (root, None)
    assert navigator.depth == 0

import pytest

from librarytui.cursor import ListCursor


def test_selected_defaults_to_zero_and_persists() -> None:
    cursor = ListCursor(3)
    assert not cursor.is_set
    assert cursor.selected() == 0
    assert cursor.is_set


def test_next_wraps_to_start() -> None:
    cursor = ListCursor(3)
    cursor.set_selected(2)
    cursor.next()
    assert cursor.selected() == 0


def test_previous_wraps_to_end() -> None:
    cursor = ListCursor(3)
    cursor.previous()
    assert cursor.selected() == 2
    cursor.previous()
    assert cursor.selected() == 1


@pytest.mark.parametrize("start", [0, 1, 4])
def test_next_size_times_is_cyclic(start: int) -> None:
    cursor = ListCursor(5)
    cursor.set_selected(start)
    for _ in range(cursor.size):
        cursor.next()
    assert cursor.selected() == start


def test_set_selected_clamps() -> None:
    cursor = ListCursor(4)
    cursor.set_selected(10)
    assert cursor.selected() == 3
    cursor.set_selected(-2)
    assert cursor.selected() == 0


def test_first_and_last() -> None:
    cursor = ListCursor(4)
    cursor.last()
    assert cursor.selected() == 3
    cursor.first()
    assert cursor.selected() == 0


def test_empty_cursor_cannot_move() -> None:
    cursor = ListCursor(0)
    with pytest.raises(AssertionError):
        cursor.next()

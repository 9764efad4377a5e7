from __future__ import annotations

from librarytui.library import Capabilities, Category, Document, DownloadMethod
from librarytui.ui.library_list import describe_item, format_item_label
from librarytui.ui.screens import format_download_summary


def test_describe_document() -> None:
    display = describe_item(Document("wiki.zim", "https://example.com/wiki.zim", 1536))
    assert display.name == "wiki.zim"
    assert display.size == "1.5 KB"
    assert display.enabled
    assert not display.dim
    assert not display.strike
    assert not display.is_category


def test_describe_category_counts_enabled_children() -> None:
    small = Document("small", "https://example.com/small", 1024)
    large = Document("large", "https://example.com/large", 4096)
    category = Category("Bundle", [small, large])
    large.set_enabled(False)
    display = describe_item(category)
    assert display.is_category
    assert display.size == "1 KB"


def test_describe_unavailable_document() -> None:
    windows = Capabilities(is_windows=True)
    mirror = Document(
        "mirror",
        "rsync://example.com/mirror",
        10,
        method=DownloadMethod.RSYNC,
        capabilities=windows,
    )
    display = describe_item(mirror)
    assert display.dim
    assert display.strike
    assert not display.enabled


def test_format_item_label_contains_name_and_size() -> None:
    display = describe_item(Document("atlas", "https://example.com/atlas", 0))
    label = format_item_label(display)
    assert "atlas" in label.plain
    assert "0 B" in label.plain
    radio = format_item_label(display, radio=True)
    assert radio.plain != label.plain


def test_format_download_summary(tmp_path) -> None:
    assert format_download_summary(0, 0, tmp_path) == "Nothing is selected for download."
    summary = format_download_summary(2, 2048, tmp_path)
    assert summary.startswith("2 items, 2 KB")
    assert str(tmp_path) in summary

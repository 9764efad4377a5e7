from __future__ import annotations

_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]


def format_size(size: int) -> str:
    if size < 0:
        raise ValueError("Size must be non-negative")
    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{size} B"
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"

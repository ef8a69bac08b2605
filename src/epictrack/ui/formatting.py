from __future__ import annotations


def get_column_string(text: str, width: int) -> str:
    """Pad ``text`` to ``width`` or truncate it with a trailing ellipsis."""
    if len(text) <= width:
        return text.ljust(width)
    if width <= 3:
        return "." * width
    return text[: width - 3] + "..."

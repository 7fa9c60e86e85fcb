from __future__ import annotations

from .buffer import Buffer
from .models import Cursor, Highlight


def recompute_render_column(cursor: Cursor, buffer: Buffer) -> None:
    if cursor.cy < len(buffer):
        cursor.rx = buffer[cursor.cy].cx_to_rx(cursor.cx)
    else:
        cursor.rx = 0


def scroll(cursor: Cursor, height: int, width: int) -> None:
    if cursor.cy < cursor.rowoff:
        cursor.rowoff = cursor.cy
    if cursor.cy >= cursor.rowoff + height:
        cursor.rowoff = cursor.cy - height + 1
    if cursor.rx < cursor.coloff:
        cursor.coloff = cursor.rx
    if cursor.rx >= cursor.coloff + width:
        cursor.coloff = cursor.rx - width + 1


def visible_rows(
    buffer: Buffer, cursor: Cursor, height: int, width: int
) -> list[tuple[str, list[Highlight]]]:
    """Render/highlight slices of the rows inside the window."""
    out: list[tuple[str, list[Highlight]]] = []
    start, end = cursor.coloff, cursor.coloff + width
    for filerow in range(cursor.rowoff, min(cursor.rowoff + height, len(buffer))):
        row = buffer[filerow]
        out.append((row.render[start:end], row.hl[start:end]))
    return out


def screen_position(cursor: Cursor) -> tuple[int, int]:
    return cursor.rx - cursor.coloff, cursor.cy - cursor.rowoff

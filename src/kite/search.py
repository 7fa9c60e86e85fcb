from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING

from .buffer import Buffer
from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_H,
    DEL_KEY,
    ENTER,
    ESC,
    KITE_QUERY_LEN,
    SEARCH_ACCEPT,
    SEARCH_CANCEL,
    SEARCH_CONTINUE,
    SEARCH_RUN,
)
from .models import Cursor, Direction, Highlight, SearchState
from .terminal import is_text_key

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchOverlay:
    """Highlight of the current match, kept so it can be undone."""

    line: int | None = None
    saved_hl: list[Highlight] | None = None

    def restore(self, buffer: Buffer) -> None:
        if self.saved_hl is not None and self.line is not None and self.line < len(buffer):
            buffer[self.line].hl = self.saved_hl
        self.line = None
        self.saved_hl = None

    def apply(self, buffer: Buffer, line: int, rx: int, length: int) -> None:
        self.restore(buffer)
        row = buffer[line]
        self.line = line
        self.saved_hl = row.hl.copy()
        for i in range(rx, min(rx + length, row.rsize)):
            row.hl[i] = Highlight.MATCH


def restore_search_snapshot(cursor: Cursor, saved: Cursor) -> None:
    for f in fields(saved):
        setattr(cursor, f.name, getattr(saved, f.name))


def search_key_update(c: int, query: str, state: SearchState) -> tuple[str, int]:
    if c in (BACKSPACE, CTRL_H, DEL_KEY):
        state.reset()
        return query[:-1], SEARCH_RUN
    if c == ESC:
        return query, SEARCH_CANCEL
    if c == ENTER:
        state.direction = Direction.FORWARD
        return query, SEARCH_ACCEPT
    if c in (ARROW_RIGHT, ARROW_DOWN):
        state.direction = Direction.FORWARD
        return query, SEARCH_RUN
    if c in (ARROW_LEFT, ARROW_UP):
        state.direction = Direction.BACKWARD
        return query, SEARCH_RUN
    if is_text_key(c):
        state.reset()
        if len(query) < KITE_QUERY_LEN:
            query += chr(c)
        return query, SEARCH_RUN
    return query, SEARCH_CONTINUE


def search_next_match(buffer: Buffer, query: str, state: SearchState) -> tuple[int, int] | None:
    """Find the next row whose render contains ``query``, wrapping around.

    Returns ``(row_index, render_column)`` or None after every row has
    been tried once.
    """
    numrows = len(buffer)
    step = state.direction.value
    if state.last_match is None:
        current = -1 if step > 0 else numrows
    else:
        current = state.last_match
    for _ in range(numrows):
        current = (current + step) % numrows
        pos = buffer[current].render.find(query)
        if pos != -1:
            return current, pos
    return None


def run_search(editor: Editor, query: str, overlay: MatchOverlay) -> None:
    cfg = editor.cfg
    overlay.restore(cfg.buffer)
    if not query:
        return

    match = search_next_match(cfg.buffer, query, cfg.search)
    if match is None:
        logger.debug("no match for %r", query)
        return

    line, rx = match
    logger.debug("match for %r at row %d col %d", query, line, rx)
    cfg.search.last_match = line
    cfg.cursor.cy = line
    cfg.cursor.cx = cfg.buffer[line].rx_to_cx(rx)
    overlay.apply(cfg.buffer, line, rx, len(query))


def find(editor: Editor) -> None:
    cfg = editor.cfg
    query = ""
    saved = replace(cfg.cursor)
    overlay = MatchOverlay()
    cfg.search.reset()

    try:
        while True:
            editor.set_status_message("Search: %s (Use ESC/Arrows/Enter)", query)
            editor.refresh_screen()
            c = editor.read_key()

            query, action = search_key_update(c, query, cfg.search)
            if action == SEARCH_CANCEL or (action == SEARCH_ACCEPT and not query):
                restore_search_snapshot(cfg.cursor, saved)
                return
            if action == SEARCH_ACCEPT:
                return
            if action == SEARCH_RUN:
                run_search(editor, query, overlay)
    finally:
        overlay.restore(cfg.buffer)
        cfg.search.reset()
        editor.set_status_message("")

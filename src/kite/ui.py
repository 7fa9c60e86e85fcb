from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_OFF,
    ANSI_INVERT_ON,
    ANSI_SHOW_CURSOR,
    KITE_STATUS_TIMEOUT,
    KITE_VERSION,
)
from .models import Highlight
from .state import EditorConfig
from .syntax import syntax_to_color
from .viewport import recompute_render_column, screen_position, scroll, visible_rows

if TYPE_CHECKING:
    from .editor import Editor


def draw_row(out: list[str], render: str, hl: list[Highlight]) -> None:
    current_color = -1
    for ch, h in zip(render, hl):
        if not ch.isprintable():
            sym = chr(ord("@") + ord(ch)) if ord(ch) <= 26 else "?"
            out.append(ANSI_INVERT_ON)
            out.append(sym)
            out.append(ANSI_INVERT_OFF)
            if current_color != -1:
                out.append(f"\x1b[{current_color}m")
        elif h == Highlight.NORMAL:
            if current_color != -1:
                out.append(ANSI_DEFAULT_FG)
                current_color = -1
            out.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                out.append(f"\x1b[{color}m")
                current_color = color
            out.append(ch)
    out.append(ANSI_DEFAULT_FG)


def draw_welcome(cfg: EditorConfig, out: list[str]) -> None:
    welcome = f"Kite editor -- version {KITE_VERSION}"[: cfg.screencols]
    padding = (cfg.screencols - len(welcome)) // 2
    if padding:
        out.append("~")
        padding -= 1
    if padding > 0:
        out.append(" " * padding)
    out.append(welcome)


def draw_rows(cfg: EditorConfig, out: list[str]) -> None:
    rows = visible_rows(cfg.buffer, cfg.cursor, cfg.screenrows, cfg.screencols)
    show_welcome = cfg.filename is None and cfg.numrows == 1 and not cfg.buffer[0].chars
    for y in range(cfg.screenrows):
        if y < len(rows):
            draw_row(out, *rows[y])
        elif show_welcome and y == cfg.screenrows // 3:
            draw_welcome(cfg, out)
        else:
            out.append("~")
        out.append(ANSI_CLEAR_LINE)
        out.append("\r\n")


def draw_status_bar(cfg: EditorConfig, out: list[str]) -> None:
    filename = os.path.basename(cfg.filename) if cfg.filename else "[No Name]"
    modified = " (modified)" if cfg.dirty else ""
    status = f"{filename:.20} - {cfg.numrows} lines{modified}"[: cfg.screencols]
    filetype = cfg.syntax.filetype if cfg.syntax else "no ft"
    rstatus = f"{filetype} | {cfg.cursor.cy + 1}/{cfg.numrows}"
    out.append(ANSI_INVERT_ON)
    out.append(status)
    fill = len(status)
    while fill < cfg.screencols:
        if cfg.screencols - fill == len(rstatus):
            out.append(rstatus)
            break
        out.append(" ")
        fill += 1
    out.append(ANSI_INVERT_OFF)
    out.append("\r\n")


def draw_message_bar(cfg: EditorConfig, out: list[str], now: float | None = None) -> None:
    out.append(ANSI_CLEAR_LINE)
    now = time.time() if now is None else now
    if cfg.statusmsg and now - cfg.statusmsg_time < KITE_STATUS_TIMEOUT:
        out.append(cfg.statusmsg[: cfg.screencols])


def build_screen(cfg: EditorConfig) -> str:
    recompute_render_column(cfg.cursor, cfg.buffer)
    scroll(cfg.cursor, cfg.screenrows, cfg.screencols)

    out: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(cfg, out)
    draw_status_bar(cfg, out)
    draw_message_bar(cfg, out)
    x, y = screen_position(cfg.cursor)
    out.append(f"\x1b[{y + 1};{x + 1}H")
    out.append(ANSI_SHOW_CURSOR)
    return "".join(out)


def refresh_screen(editor: Editor) -> None:
    os.write(editor.stdout_fd, build_screen(editor.cfg).encode("utf-8", errors="replace"))

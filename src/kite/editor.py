from __future__ import annotations

import errno
import logging
import os
import signal
import sys
from typing import Callable

from .buffer import Buffer
from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    HOME_KEY,
    KITE_QUIT_TIMES,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
)
from .io_ops import open_file, save_file, set_status
from .log import setup_logging
from .search import find
from .state import EditorConfig
from .syntax import select_syntax_highlight, update_syntax
from .terminal import RawMode, get_window_size, is_text_key, read_key
from .ui import refresh_screen

logger = logging.getLogger(__name__)


class Editor:
    def __init__(self, stdin_fd: int = 0, stdout_fd: int = 1, cfg: EditorConfig | None = None) -> None:
        self.cfg = cfg if cfg is not None else EditorConfig()
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.key_handlers: dict[int, Callable[[], None]] = {
            CTRL_S: self.save,
            CTRL_F: self.find,
            ENTER: self.insert_newline,
            TAB: self.insert_tab,
            BACKSPACE: self.del_char,
            CTRL_H: self.del_char,
            DEL_KEY: self.del_char,
            ARROW_UP: self.move_up,
            ARROW_DOWN: self.move_down,
            ARROW_LEFT: self.move_left,
            ARROW_RIGHT: self.move_right,
            HOME_KEY: self.move_home,
            END_KEY: self.move_end,
            PAGE_UP: self.page_up,
            PAGE_DOWN: self.page_down,
        }

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.cfg.screenrows = max(1, rows - 2)
        self.cfg.screencols = max(1, cols)
        logger.debug("window is %dx%d", self.cfg.screencols, self.cfg.screenrows)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        set_status(self.cfg, fmt, *args)

    def read_key(self) -> int:
        return read_key(self.stdin_fd)

    def refresh_screen(self) -> None:
        refresh_screen(self)

    def update_syntax(self) -> None:
        update_syntax(self.cfg.buffer, self.cfg.syntax)

    def open(self, filename: str) -> None:
        self.cfg.syntax = select_syntax_highlight(filename)
        open_file(self.cfg, filename)
        self.update_syntax()

    def open_new(self, filename: str | None) -> None:
        self.cfg.buffer = Buffer()
        self.cfg.filename = filename
        self.cfg.syntax = select_syntax_highlight(filename)
        self.update_syntax()

    def save(self) -> None:
        save_file(self.cfg)

    def find(self) -> None:
        find(self)

    @property
    def current_row_len(self) -> int:
        return self.cfg.buffer.row_len(self.cfg.cursor.cy)

    def clamp_cursor_x(self) -> None:
        cursor = self.cfg.cursor
        cursor.cx = min(cursor.cx, self.current_row_len)

    def move_left(self) -> None:
        cursor = self.cfg.cursor
        if cursor.cx > 0:
            cursor.cx -= 1
        elif cursor.cy > 0:
            cursor.cy -= 1
            cursor.cx = self.current_row_len

    def move_right(self) -> None:
        cursor = self.cfg.cursor
        if cursor.cx < self.current_row_len:
            cursor.cx += 1
        elif cursor.cy + 1 < self.cfg.numrows:
            cursor.cy += 1
            cursor.cx = 0

    def move_up(self) -> None:
        if self.cfg.cursor.cy > 0:
            self.cfg.cursor.cy -= 1
        self.clamp_cursor_x()

    def move_down(self) -> None:
        if self.cfg.cursor.cy + 1 < self.cfg.numrows:
            self.cfg.cursor.cy += 1
        self.clamp_cursor_x()

    def move_home(self) -> None:
        self.cfg.cursor.cx = 0

    def move_end(self) -> None:
        self.cfg.cursor.cx = self.current_row_len

    def page_up(self) -> None:
        cursor = self.cfg.cursor
        cursor.cy = max(0, cursor.cy - self.cfg.screenrows)
        self.clamp_cursor_x()

    def page_down(self) -> None:
        cursor = self.cfg.cursor
        cursor.cy = min(self.cfg.numrows - 1, cursor.cy + self.cfg.screenrows)
        self.clamp_cursor_x()

    def insert_char(self, c: str) -> None:
        cursor = self.cfg.cursor
        self.cfg.buffer.insert_char(cursor.cy, cursor.cx, c)
        cursor.cx += 1
        self.update_syntax()

    def insert_tab(self) -> None:
        self.insert_char("\t")

    def insert_newline(self) -> None:
        cursor = self.cfg.cursor
        self.cfg.buffer.split_row(cursor.cy, cursor.cx)
        cursor.cy += 1
        cursor.cx = 0
        self.update_syntax()

    def del_char(self) -> None:
        cursor = self.cfg.cursor
        if cursor.cx == 0 and cursor.cy == 0:
            return
        at_line_start = cursor.cx == 0
        cursor.cx = self.cfg.buffer.delete_char_before(cursor.cy, cursor.cx)
        if at_line_start:
            cursor.cy -= 1
        self.update_syntax()

    def confirm_quit(self) -> bool:
        if self.cfg.dirty and self.cfg.quit_times > 0:
            self.set_status_message(
                "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                self.cfg.quit_times,
            )
            self.cfg.quit_times -= 1
            return False
        return True

    def process_keypress(self, c: int | None = None) -> bool:
        """Handle one key. Returns True once the editor should exit."""
        if c is None:
            c = self.read_key()

        if c == CTRL_Q:
            return self.confirm_quit()

        handler = self.key_handlers.get(c)
        if handler is not None:
            handler()
        elif is_text_key(c):
            self.insert_char(chr(c))

        self.cfg.quit_times = KITE_QUIT_TIMES
        return False


HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


def open_document(editor: Editor, filename: str | None) -> str:
    """Load ``filename`` into ``editor`` and return the first status line.

    No filename gives an unnamed empty buffer. A missing file gives an
    empty buffer under that name. Other OSErrors propagate.
    """
    if filename is None:
        editor.open_new(None)
        return HELP_MESSAGE
    try:
        editor.open(filename)
    except FileNotFoundError:
        logger.info("%s does not exist, starting a new file", filename)
        editor.open_new(filename)
        return f"New file. {HELP_MESSAGE}"
    return HELP_MESSAGE


def run(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: kite [filename]", file=sys.stderr)
        return 1
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("kite: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    setup_logging()
    editor = Editor(stdin_fd, stdout_fd)
    filename = args[0] if args else None
    try:
        status = open_document(editor, filename)
    except OSError as exc:
        print(f"kite: can't open {filename}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        editor.update_window_size()
        signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
        with RawMode(stdin_fd):
            editor.set_status_message(status)
            while True:
                editor.refresh_screen()
                if editor.process_keypress():
                    break
            os.write(stdout_fd, b"\x1b[2J\x1b[H")
    except OSError as exc:
        if exc.errno == errno.ENOTTY:
            print("kite: stdin is not a tty", file=sys.stderr)
            return 1
        raise
    return 0

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from .constants import KITE_TAB_STOP


class Highlight(IntEnum):
    NORMAL = 0
    NUMBER = 1
    MATCH = 2
    STRING = 3
    COMMENT = 4
    MLCOMMENT = 5
    KEYWORD1 = 6
    KEYWORD2 = 7


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


def _tab_width(rx: int, tab_stop: int) -> int:
    return tab_stop - (rx % tab_stop)


@dataclass(slots=True)
class EditorSyntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords1: tuple[str, ...]
    keywords2: tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    """One line of text.

    ``chars`` is what the user typed. ``render`` is ``chars`` with tabs
    expanded and ``hl`` holds one highlight class per rendered character.
    Both derived fields are stale after ``set_chars`` until the next
    highlight pass.
    """

    chars: str = ""
    render: str = ""
    hl: list[Highlight] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def set_chars(self, chars: str) -> None:
        self.chars = chars

    def render_tabs(self, tab_stop: int = KITE_TAB_STOP) -> str:
        out: list[str] = []
        rx = 0
        for ch in self.chars:
            if ch == "\t":
                width = _tab_width(rx, tab_stop)
                out.append(" " * width)
                rx += width
            else:
                out.append(ch)
                rx += 1
        return "".join(out)

    def update_render(self, tab_stop: int = KITE_TAB_STOP) -> None:
        self.render = self.render_tabs(tab_stop)

    def cx_to_rx(self, cx: int, tab_stop: int = KITE_TAB_STOP) -> int:
        rx = 0
        for ch in self.chars[: max(0, cx)]:
            if ch == "\t":
                rx += _tab_width(rx, tab_stop)
            else:
                rx += 1
        return rx

    def rx_to_cx(self, rx: int, tab_stop: int = KITE_TAB_STOP) -> int:
        # Several render columns inside one tab map back to the tab itself.
        cur_rx = 0
        for cx, ch in enumerate(self.chars):
            cur_rx += _tab_width(cur_rx, tab_stop) if ch == "\t" else 1
            if cur_rx > rx:
                return cx
        return self.size


@dataclass(slots=True)
class Cursor:
    cx: int = 0
    rx: int = 0
    cy: int = 0
    rowoff: int = 0
    coloff: int = 0


@dataclass(slots=True)
class SearchState:
    last_match: int | None = None
    direction: Direction = Direction.FORWARD

    def reset(self) -> None:
        self.last_match = None
        self.direction = Direction.FORWARD

from __future__ import annotations

KITE_VERSION = "0.1.0"
KITE_TAB_STOP = 4
KITE_QUERY_LEN = 256
KITE_QUIT_TIMES = 3
KITE_STATUS_TIMEOUT = 5

SEARCH_CONTINUE = 0
SEARCH_CANCEL = 1
SEARCH_ACCEPT = 2
SEARCH_RUN = 3

HL_HIGHLIGHT_STRINGS = 1 << 0
HL_HIGHLIGHT_NUMBERS = 1 << 1

# Key actions.
CTRL_F = 6
CTRL_H = 8
TAB = 9
ENTER = 13
CTRL_Q = 17
CTRL_S = 19
ESC = 27
BACKSPACE = 127

# Special keys sit past the last Unicode code point.
KEY_BASE = 0x110000
ARROW_LEFT = KEY_BASE
ARROW_RIGHT = KEY_BASE + 1
ARROW_UP = KEY_BASE + 2
ARROW_DOWN = KEY_BASE + 3
DEL_KEY = KEY_BASE + 4
HOME_KEY = KEY_BASE + 5
END_KEY = KEY_BASE + 6
PAGE_UP = KEY_BASE + 7
PAGE_DOWN = KEY_BASE + 8

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_INVERT_OFF = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"

# Characters that end a keyword candidate.
SEPARATORS = frozenset(" \0,.()+-/*=~%<>[];")

C_HL_EXTENSIONS = (".c", ".h", ".cpp")
C_HL_KEYWORDS1 = (
    "switch",
    "if",
    "while",
    "for",
    "break",
    "continue",
    "return",
    "else",
    "struct",
    "union",
    "typedef",
    "static",
    "enum",
    "class",
    "case",
)
# C types (secondary class).
C_HL_KEYWORDS2 = (
    "int",
    "long",
    "double",
    "float",
    "char",
    "unsigned",
    "signed",
    "void",
)

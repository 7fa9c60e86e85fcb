from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS1,
    C_HL_KEYWORDS2,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    SEPARATORS,
)
from .models import EditorSyntax, Highlight, Row

logger = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="C",
        filematch=C_HL_EXTENSIONS,
        keywords1=C_HL_KEYWORDS1,
        keywords2=C_HL_KEYWORDS2,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_STRINGS | HL_HIGHLIGHT_NUMBERS,
    ),
)

_COLORS = {
    Highlight.NUMBER: 31,
    Highlight.KEYWORD1: 32,
    Highlight.KEYWORD2: 33,
    Highlight.MATCH: 34,
    Highlight.STRING: 35,
    Highlight.COMMENT: 36,
    Highlight.MLCOMMENT: 36,
}


def is_separator(c: str) -> bool:
    return c in SEPARATORS


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def syntax_to_color(hl: Highlight) -> int:
    return _COLORS.get(hl, 37)


def select_syntax_highlight(filename: str | None) -> EditorSyntax | None:
    if not filename:
        return None
    ext = os.path.splitext(filename)[1]
    for syntax in HLDB:
        if ext in syntax.filematch:
            logger.debug("selected %s grammar for %s", syntax.filetype, filename)
            return syntax
    return None


def update_syntax(rows: Iterable[Row], syntax: EditorSyntax | None) -> None:
    """Re-render and re-highlight every row, top to bottom.

    An unclosed block comment carries into the following rows, so rows
    cannot be highlighted independently of the ones above them.
    """
    in_comment = False
    for row in rows:
        row.update_render()
        in_comment = highlight_row(row, syntax, in_comment)


def highlight_row(row: Row, syntax: EditorSyntax | None, in_comment: bool) -> bool:
    """Fill ``row.hl`` and return whether a block comment is still open."""
    row.hl = [Highlight.NORMAL] * row.rsize
    if syntax is None:
        return False

    p = row.render
    hl = row.hl
    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end
    numbers = bool(syntax.flags & HL_HIGHLIGHT_NUMBERS)
    strings = bool(syntax.flags & HL_HIGHLIGHT_STRINGS)

    in_string = ""
    i = 0
    while i < len(p):
        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if scs and not in_string and not in_comment and p.startswith(scs, i):
            hl[i:] = [Highlight.COMMENT] * (len(p) - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                if p.startswith(mce, i):
                    hl[i : i + len(mce)] = [Highlight.MLCOMMENT] * len(mce)
                    i += len(mce)
                    in_comment = False
                    continue
                hl[i] = Highlight.MLCOMMENT
                i += 1
                continue
            if p.startswith(mcs, i):
                hl[i : i + len(mcs)] = [Highlight.MLCOMMENT] * len(mcs)
                i += len(mcs)
                in_comment = True
                continue

        if numbers:
            if is_digit(ch) or (ch == "." and prev_hl == Highlight.NUMBER):
                hl[i] = Highlight.NUMBER
                i += 1
                continue

        if strings:
            if in_string:
                hl[i] = Highlight.STRING
                if ch == "\\" and i + 1 < len(p):
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                continue
            if ch in ('"', "'"):
                in_string = ch
                hl[i] = Highlight.STRING
                i += 1
                continue

        if i == 0 or is_separator(p[i - 1]):
            end = i
            while end < len(p) and not is_separator(p[end]):
                end += 1
            word = p[i:end]
            mark = None
            if word in syntax.keywords1:
                mark = Highlight.KEYWORD1
            elif word in syntax.keywords2:
                mark = Highlight.KEYWORD2
            if mark is not None:
                hl[i:end] = [mark] * (end - i)
                i = end
                continue

        i += 1

    return in_comment

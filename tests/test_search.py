"""Incremental search: key handling, wraparound scan and the prompt loop."""

from __future__ import annotations

import unittest
from unittest import mock

from kite.buffer import Buffer
from kite.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_UP,
    BACKSPACE,
    ENTER,
    ESC,
    SEARCH_ACCEPT,
    SEARCH_CANCEL,
    SEARCH_CONTINUE,
    SEARCH_RUN,
)
from kite.editor import Editor
from kite.models import Cursor, Direction, Highlight, SearchState
from kite.search import restore_search_snapshot, search_key_update, search_next_match
from kite.state import EditorConfig
from kite.syntax import update_syntax


def make_buffer(lines: list[str]) -> Buffer:
    buf = Buffer.from_lines(lines)
    update_syntax(buf, None)
    return buf


def make_editor(lines: list[str], cursor: Cursor | None = None) -> Editor:
    cfg = EditorConfig(buffer=make_buffer(lines), screenrows=10, screencols=40)
    if cursor is not None:
        cfg.cursor = cursor
    return Editor(cfg=cfg)


def run_find(editor: Editor, keys: list[int], on_key=None) -> None:
    """Drive ``find`` with scripted keys; ``on_key`` sees the editor before each read."""
    pending = list(keys)

    def fake_read_key() -> int:
        if on_key is not None:
            on_key(editor)
        return pending.pop(0)

    with mock.patch.object(editor, "read_key", side_effect=fake_read_key), mock.patch.object(
        editor, "refresh_screen"
    ):
        editor.find()
    assert not pending


class SearchKeyUpdateTests(unittest.TestCase):
    def test_typing_extends_query_and_resets_state(self) -> None:
        state = SearchState(last_match=4, direction=Direction.BACKWARD)
        query, action = search_key_update(ord("x"), "fo", state)
        self.assertEqual((query, action), ("fox", SEARCH_RUN))
        self.assertIsNone(state.last_match)
        self.assertIs(state.direction, Direction.FORWARD)

    def test_navigation_sets_direction(self) -> None:
        state = SearchState(last_match=1)
        self.assertEqual(search_key_update(ARROW_UP, "q", state), ("q", SEARCH_RUN))
        self.assertIs(state.direction, Direction.BACKWARD)
        self.assertEqual(state.last_match, 1)
        search_key_update(ARROW_DOWN, "q", state)
        self.assertIs(state.direction, Direction.FORWARD)
        search_key_update(ARROW_LEFT, "q", state)
        self.assertIs(state.direction, Direction.BACKWARD)

    def test_prompt_control_keys(self) -> None:
        state = SearchState()
        self.assertEqual(search_key_update(ESC, "q", state)[1], SEARCH_CANCEL)
        self.assertEqual(search_key_update(ENTER, "q", state)[1], SEARCH_ACCEPT)
        self.assertEqual(search_key_update(BACKSPACE, "qr", state), ("q", SEARCH_RUN))
        self.assertEqual(search_key_update(1, "q", state), ("q", SEARCH_CONTINUE))


class SearchNextMatchTests(unittest.TestCase):
    def test_forward_wraps_to_first_row(self) -> None:
        buf = make_buffer(["foo", "bar", "foo"])
        state = SearchState(last_match=2, direction=Direction.FORWARD)
        self.assertEqual(search_next_match(buf, "foo", state), (0, 0))

    def test_backward_wraps_to_last_row(self) -> None:
        buf = make_buffer(["foo", "bar", "foo"])
        state = SearchState(last_match=0, direction=Direction.BACKWARD)
        self.assertEqual(search_next_match(buf, "foo", state), (2, 0))

    def test_fresh_scan_starts_at_either_end(self) -> None:
        buf = make_buffer(["a foo", "bar", "foo"])
        self.assertEqual(search_next_match(buf, "foo", SearchState()), (0, 2))
        backward = SearchState(direction=Direction.BACKWARD)
        self.assertEqual(search_next_match(buf, "foo", backward), (2, 0))

    def test_single_matching_row_finds_itself(self) -> None:
        buf = make_buffer(["x", "needle", "y"])
        state = SearchState(last_match=1)
        self.assertEqual(search_next_match(buf, "needle", state), (1, 0))

    def test_no_match(self) -> None:
        buf = make_buffer(["foo", "bar"])
        self.assertIsNone(search_next_match(buf, "Foo", SearchState()))

    def test_matches_rendered_text(self) -> None:
        buf = make_buffer(["\tfoo"])
        self.assertEqual(search_next_match(buf, "foo", SearchState()), (0, 4))


class FindPromptTests(unittest.TestCase):
    def test_accept_keeps_cursor_on_match(self) -> None:
        editor = make_editor(["alpha", "\tbeta", "gamma"])
        run_find(editor, [ord("b"), ord("e"), ENTER])
        self.assertEqual((editor.cfg.cursor.cy, editor.cfg.cursor.cx), (1, 1))
        self.assertEqual(editor.cfg.statusmsg, "")

    def test_snapshot_restores_every_cursor_field(self) -> None:
        cursor = Cursor(cx=9, rx=12, cy=40, rowoff=30, coloff=5)
        saved = Cursor(cx=1, rx=4, cy=2, rowoff=0, coloff=0)
        restore_search_snapshot(cursor, saved)
        self.assertEqual(cursor, saved)
        self.assertIsNot(cursor, saved)

    def test_escape_restores_snapshot(self) -> None:
        start = Cursor(cx=2, rx=2, cy=0, rowoff=0, coloff=0)
        editor = make_editor(["alpha", "beta", "gamma"], cursor=start)
        run_find(editor, [ord("g"), ord("a"), ESC])
        self.assertEqual(editor.cfg.cursor, Cursor(cx=2, rx=2, cy=0, rowoff=0, coloff=0))

    def test_empty_query_on_enter_restores_snapshot(self) -> None:
        editor = make_editor(["alpha", "beta"], cursor=Cursor(cx=1, rx=1, cy=1))
        run_find(editor, [ord("a"), BACKSPACE, ENTER])
        self.assertEqual((editor.cfg.cursor.cy, editor.cfg.cursor.cx), (1, 1))

    def test_navigation_walks_matches_with_wraparound(self) -> None:
        editor = make_editor(["foo", "bar", "foo"])
        seen: list[int] = []
        keys = [ord("f"), ord("o"), ord("o"), ARROW_DOWN, ARROW_DOWN, ARROW_UP, ENTER]

        def record(ed: Editor) -> None:
            seen.append(ed.cfg.cursor.cy)

        run_find(editor, keys, on_key=record)
        # Cursor position seen before each key is read.
        self.assertEqual(seen, [0, 0, 0, 0, 2, 0, 2])
        self.assertEqual(editor.cfg.cursor.cy, 2)

    def test_match_overlay_is_shown_then_cleared(self) -> None:
        editor = make_editor(["xx foo"])
        overlays: list[list[Highlight]] = []

        def record(ed: Editor) -> None:
            overlays.append(list(ed.cfg.buffer[0].hl))

        run_find(editor, [ord("f"), ord("o"), ENTER], on_key=record)
        self.assertEqual(overlays[1][3], Highlight.MATCH)
        self.assertEqual(overlays[2][3:5], [Highlight.MATCH] * 2)
        self.assertEqual(overlays[2][5], Highlight.NORMAL)
        self.assertEqual(editor.cfg.buffer[0].hl, [Highlight.NORMAL] * 6)

    def test_no_match_leaves_cursor(self) -> None:
        editor = make_editor(["abc", "def"], cursor=Cursor(cx=1, cy=1))
        run_find(editor, [ord("z"), ENTER])
        self.assertEqual((editor.cfg.cursor.cy, editor.cfg.cursor.cx), (1, 1))


if __name__ == "__main__":
    unittest.main()

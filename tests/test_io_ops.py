"""File load/save and status messages."""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path

from kite.buffer import Buffer
from kite.io_ops import open_file, save_file, set_status
from kite.log import setup_logging
from kite.state import EditorConfig


class OpenFileTests(unittest.TestCase):
    def test_lines_are_stripped_of_terminators(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "a.c"
            path.write_bytes(b"int x;\r\n\tfoo\nlast")
            cfg = EditorConfig()
            open_file(cfg, str(path))
        self.assertEqual(cfg.buffer.lines(), ["int x;", "\tfoo", "last"])
        self.assertEqual(cfg.filename, str(path))
        self.assertFalse(cfg.dirty)

    def test_only_newline_ends_a_row(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cr.txt"
            path.write_bytes(b"a\rb\nc\r\r\n")
            cfg = EditorConfig()
            open_file(cfg, str(path))
            self.assertEqual(cfg.buffer.lines(), ["a\rb", "c\r"])
            self.assertTrue(save_file(cfg))
            self.assertEqual(path.read_bytes(), b"a\rb\r\nc\r\r\n")

    def test_empty_file_has_one_row(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.txt"
            path.write_bytes(b"")
            cfg = EditorConfig()
            open_file(cfg, str(path))
        self.assertEqual(cfg.buffer.lines(), [""])

    def test_missing_file_raises_and_leaves_session(self) -> None:
        cfg = EditorConfig(buffer=Buffer.from_lines(["keep"]))
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                open_file(cfg, os.path.join(tmp, "missing.c"))
        self.assertEqual(cfg.buffer.lines(), ["keep"])
        self.assertIsNone(cfg.filename)


class SaveFileTests(unittest.TestCase):
    def test_save_writes_crlf_and_clears_dirty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.txt"
            path.write_text("old content that is longer\n")
            buf = Buffer.from_lines(["ab", "c"])
            buf.insert_char(1, 1, "d")
            cfg = EditorConfig(buffer=buf, filename=str(path))
            self.assertTrue(save_file(cfg))
            self.assertEqual(path.read_bytes(), b"ab\r\ncd\r\n")
        self.assertFalse(cfg.dirty)
        self.assertEqual(cfg.statusmsg, "8 bytes written to disk")

    def test_save_failure_keeps_dirty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            buf = Buffer.from_lines(["x"])
            buf.insert_char(0, 0, "y")
            cfg = EditorConfig(buffer=buf, filename=os.path.join(tmp, "no", "such", "dir.txt"))
            self.assertFalse(save_file(cfg))
        self.assertTrue(cfg.dirty)
        self.assertTrue(cfg.statusmsg.startswith("Can't save! I/O error:"))
        self.assertEqual(buf.lines(), ["yx"])

    def test_save_without_filename(self) -> None:
        cfg = EditorConfig()
        self.assertFalse(save_file(cfg))
        self.assertEqual(cfg.statusmsg, "Can't save! No filename.")


class StatusAndLoggingTests(unittest.TestCase):
    def test_status_formatting(self) -> None:
        cfg = EditorConfig()
        set_status(cfg, "%d more", 2)
        self.assertEqual(cfg.statusmsg, "2 more")
        self.assertGreater(cfg.statusmsg_time, 0)
        set_status(cfg, "100% literal")
        self.assertEqual(cfg.statusmsg, "100% literal")

    def test_logging_goes_to_file_only_when_configured(self) -> None:
        self.addCleanup(setup_logging, {})
        handler = setup_logging({})
        self.assertIsInstance(handler, logging.NullHandler)

        with tempfile.TemporaryDirectory() as tmp:
            log_path = os.path.join(tmp, "kite.log")
            handler = setup_logging({"KITE_LOG": log_path, "KITE_LOG_LEVEL": "info"})
            logging.getLogger("kite.io_ops").info("hello %s", "log")
            handler.flush()
            with open(log_path, encoding="utf-8") as f:
                self.assertIn("INFO kite.io_ops: hello log", f.read())
            setup_logging({})


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import logging
import time

from .buffer import Buffer
from .state import EditorConfig

logger = logging.getLogger(__name__)


def set_status(cfg: EditorConfig, fmt: str, *args: object) -> None:
    cfg.statusmsg = fmt % args if args else fmt
    cfg.statusmsg_time = time.time()


def read_lines(filename: str) -> list[str]:
    lines = []
    with open(filename, "rb") as f:
        for line in f:
            if line.endswith(b"\n"):
                line = line[:-1]
                if line.endswith(b"\r"):
                    line = line[:-1]
            lines.append(line.decode("utf-8", errors="replace"))
    return lines


def open_file(cfg: EditorConfig, filename: str) -> None:
    """Load ``filename`` into a fresh buffer.

    Raises FileNotFoundError (and any other OSError) without touching the
    session, so the caller decides whether to start with an empty buffer.
    """
    lines = read_lines(filename)
    cfg.buffer = Buffer.from_lines(lines)
    cfg.filename = filename
    logger.info("opened %s (%d lines)", filename, len(lines))


def save_file(cfg: EditorConfig) -> bool:
    if not cfg.filename:
        set_status(cfg, "Can't save! No filename.")
        return False

    text = cfg.buffer.to_text("\r\n")
    try:
        with open(cfg.filename, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as exc:
        logger.warning("saving %s failed: %s", cfg.filename, exc)
        set_status(cfg, "Can't save! I/O error: %s", exc.strerror or exc)
        return False

    cfg.buffer.dirty = False
    nbytes = len(text.encode("utf-8"))
    logger.info("wrote %d bytes to %s", nbytes, cfg.filename)
    set_status(cfg, "%d bytes written to disk", nbytes)
    return True

from __future__ import annotations

import errno
import fcntl
import os
import re
import struct
import termios
from contextlib import AbstractContextManager

from .constants import (
    CSI_SIMPLE_MAP,
    CSI_TILDE_MAP,
    ESC,
    KEY_BASE,
    SS3_SIMPLE_MAP,
)


def is_text_key(c: int) -> bool:
    return 32 <= c < KEY_BASE and c != 127 and chr(c).isprintable()


def _read_byte_once(fd: int) -> int | None:
    try:
        data = os.read(fd, 1)
    except InterruptedError:
        return None
    if not data:
        return None
    return data[0]


def _read_byte_blocking(fd: int) -> int:
    while True:
        c = _read_byte_once(fd)
        if c is not None:
            return c


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8(fd: int, lead: int) -> int:
    raw = bytearray([lead])
    for _ in range(_utf8_length(lead) - 1):
        c = _read_byte_once(fd)
        if c is None:
            break
        raw.append(c)
    text = raw.decode("utf-8", errors="replace")
    return ord(text[0])


def read_key(fd: int) -> int:
    c = _read_byte_blocking(fd)
    if c >= 0x80:
        return _read_utf8(fd, c)
    if c != ESC:
        return c

    seq0 = _read_byte_once(fd)
    if seq0 is None:
        return ESC
    seq1 = _read_byte_once(fd)
    if seq1 is None:
        return ESC

    if seq0 == ord("["):
        simple = CSI_SIMPLE_MAP.get(seq1)
        if simple is not None:
            return simple
        if ord("0") <= seq1 <= ord("9"):
            seq2 = _read_byte_once(fd)
            if seq2 is None:
                return ESC
            if seq2 == ord("~"):
                return CSI_TILDE_MAP.get(seq1, ESC)
    elif seq0 == ord("O"):
        return SS3_SIMPLE_MAP.get(seq1, ESC)
    return ESC


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    if os.write(ofd, b"\x1b[6n") != 4:
        raise OSError(errno.EIO, "cursor query write failed")

    buf = bytearray()
    while len(buf) < 31:
        c = _read_byte_once(ifd)
        if c is None:
            break
        buf.append(c)
        if c == ord("R"):
            break

    match = re.match(rb"\x1b\[(\d+);(\d+)R", bytes(buf))
    if not match:
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        pass

    orig_row, orig_col = get_cursor_position(ifd, ofd)
    if os.write(ofd, b"\x1b[999C\x1b[999B") != 12:
        raise OSError(errno.EIO, "window query write failed")
    rows, cols = get_cursor_position(ifd, ofd)
    os.write(ofd, f"\x1b[{orig_row};{orig_col}H".encode())
    return rows, cols


class RawMode(AbstractContextManager["RawMode"]):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")

        self._orig = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._orig is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._orig)

from __future__ import annotations

from dataclasses import dataclass, field

from .buffer import Buffer
from .constants import KITE_QUIT_TIMES
from .models import Cursor, EditorSyntax, SearchState


@dataclass(slots=True)
class EditorConfig:
    """Everything one editing session owns."""

    cursor: Cursor = field(default_factory=Cursor)
    screenrows: int = 0
    screencols: int = 0
    buffer: Buffer = field(default_factory=Buffer)
    filename: str | None = None
    syntax: EditorSyntax | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    quit_times: int = KITE_QUIT_TIMES
    search: SearchState = field(default_factory=SearchState)

    @property
    def numrows(self) -> int:
        return len(self.buffer)

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

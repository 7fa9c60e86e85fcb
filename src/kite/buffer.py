from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import Row


class Buffer:
    """Ordered rows of a document. Never empty once opened.

    Mutations only touch ``Row.chars``; callers re-run the highlighter
    before anything reads ``render`` or ``hl`` again.
    """

    def __init__(self, rows: list[Row] | None = None) -> None:
        self.rows: list[Row] = rows if rows else [Row()]
        self.dirty = False

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Buffer":
        return cls([Row(chars=line) for line in lines])

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, idx: int) -> Row:
        return self.rows[idx]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def lines(self) -> list[str]:
        return [row.chars for row in self.rows]

    def to_text(self, newline: str = "\r\n") -> str:
        return "".join(f"{row.chars}{newline}" for row in self.rows)

    def row_len(self, y: int) -> int:
        if 0 <= y < len(self.rows):
            return self.rows[y].size
        return 0

    def insert_char(self, y: int, x: int, c: str) -> None:
        row = self.rows[y]
        x = min(x, row.size)
        row.set_chars(row.chars[:x] + c + row.chars[x:])
        self.dirty = True

    def delete_char_before(self, y: int, x: int) -> int:
        """Backspace at ``(y, x)``; returns the cursor column afterwards.

        At column 0 the row is joined onto the previous one and the
        returned column is where the two halves meet.
        """
        if x == 0 and y == 0:
            return 0
        if x > 0:
            row = self.rows[y]
            row.set_chars(row.chars[: x - 1] + row.chars[x:])
            self.dirty = True
            return x - 1
        join_at = self.rows[y - 1].size
        self.join_rows(y - 1)
        return join_at

    def split_row(self, y: int, x: int) -> None:
        row = self.rows[y]
        x = min(x, row.size)
        right = row.chars[x:]
        row.set_chars(row.chars[:x])
        self.rows.insert(y + 1, Row(chars=right))
        self.dirty = True

    def join_rows(self, y: int) -> None:
        row = self.rows[y]
        row.set_chars(row.chars + self.rows[y + 1].chars)
        self.delete_row(y + 1)

    def delete_row(self, y: int) -> None:
        del self.rows[y]
        if not self.rows:
            self.rows.append(Row())
        self.dirty = True

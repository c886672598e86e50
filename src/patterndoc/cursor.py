"""Consumable line sequence used by the field readers."""

from __future__ import annotations

from typing import Iterable

from patterndoc.errors import CursorExhaustedError


class LineCursor:
    """Position index over an immutable sequence of lines.

    ``shift`` advances past the front line, ``peek`` reads it without
    advancing and ``unshift`` steps back to replay the line just shifted.
    The backing tuple is never modified, so ``consumed + len(cursor)``
    always equals the original line count.

    Example:
        cursor = LineCursor.from_text("a\\nb")
        cursor.shift()      # "a"
        cursor.unshift("a")
        cursor.peek()       # "a"
    """

    __slots__ = ("_lines", "_index")

    def __init__(self, lines: Iterable[str]):
        self._lines: tuple[str, ...] = tuple(lines)
        self._index = 0

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        """Split on newlines only, keeping blank lines one-to-one."""
        return cls(text.split("\n"))

    def __len__(self) -> int:
        return len(self._lines) - self._index

    def __bool__(self) -> bool:
        return self._index < len(self._lines)

    def __repr__(self) -> str:
        return f"LineCursor(consumed={self._index}, remaining={len(self)})"

    @property
    def consumed(self) -> int:
        """Number of lines shifted so far."""
        return self._index

    def peek(self) -> str | None:
        """Return the front line without consuming it, or None when empty."""
        if not self:
            return None
        return self._lines[self._index]

    def shift(self) -> str:
        """Consume and return the front line."""
        if not self:
            raise CursorExhaustedError()
        line = self._lines[self._index]
        self._index += 1
        return line

    def unshift(self, line: str) -> None:
        """Push back the line returned by the most recent ``shift``."""
        if self._index == 0 or self._lines[self._index - 1] != line:
            raise ValueError("unshift() may only replay the previously shifted line")
        self._index -= 1

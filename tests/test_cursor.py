"""Tests for the line cursor."""

import pytest

from patterndoc.cursor import LineCursor
from patterndoc.errors import CursorExhaustedError


class TestLineCursor:
    """Tests for LineCursor."""

    def test_from_text_keeps_blank_lines(self):
        """Test splitting keeps one entry per line break."""
        cursor = LineCursor.from_text("a\n\nb\n")

        assert len(cursor) == 4
        assert [cursor.shift() for _ in range(4)] == ["a", "", "b", ""]

    def test_peek_does_not_consume(self):
        """Test peek reads the front line without advancing."""
        cursor = LineCursor(["first", "second"])

        assert cursor.peek() == "first"
        assert cursor.peek() == "first"
        assert len(cursor) == 2

    def test_peek_empty(self):
        """Test peek on an exhausted cursor returns None."""
        cursor = LineCursor([])

        assert cursor.peek() is None
        assert not cursor

    def test_shift_advances(self):
        """Test shift returns lines in order and tracks consumption."""
        cursor = LineCursor(["a", "b", "c"])

        assert cursor.shift() == "a"
        assert cursor.shift() == "b"
        assert cursor.consumed == 2
        assert len(cursor) == 1
        assert cursor.consumed + len(cursor) == 3

    def test_shift_exhausted_raises(self):
        """Test shift on an empty cursor raises."""
        cursor = LineCursor(["only"])
        cursor.shift()

        with pytest.raises(CursorExhaustedError):
            cursor.shift()

    def test_exhausted_error_is_index_error(self):
        """Test the exhausted condition is also an IndexError."""
        with pytest.raises(IndexError):
            LineCursor([]).shift()

    def test_unshift_replays_previous_line(self):
        """Test unshift steps back to the line just shifted."""
        cursor = LineCursor(["a", "b"])
        line = cursor.shift()
        cursor.unshift(line)

        assert cursor.peek() == "a"
        assert cursor.consumed == 0

    def test_unshift_rejects_other_lines(self):
        """Test unshift refuses lines that were not just shifted."""
        cursor = LineCursor(["a", "b"])
        cursor.shift()

        with pytest.raises(ValueError):
            cursor.unshift("not a")

    def test_unshift_at_start_raises(self):
        """Test unshift before any shift raises."""
        with pytest.raises(ValueError):
            LineCursor(["a"]).unshift("a")

    def test_backing_lines_are_not_mutated(self):
        """Test the source list is copied, not consumed."""
        lines = ["a", "b"]
        cursor = LineCursor(lines)
        cursor.shift()

        assert lines == ["a", "b"]

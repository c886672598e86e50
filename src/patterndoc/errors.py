"""Exceptions raised by patterndoc."""

from __future__ import annotations


class PatternDocError(Exception):
    """Base exception for all patterndoc errors."""

    pass


class MalformedParameterError(PatternDocError):
    """Raised when a ``@param`` line does not match ``{type} name - description``."""

    def __init__(self, line: str, pattern_name: str | None = None) -> None:
        self.line = line
        self.pattern_name = pattern_name
        where = f" in pattern '{pattern_name}'" if pattern_name else ""
        super().__init__(f"Malformed @param declaration{where}: {line!r}")


class CursorExhaustedError(PatternDocError, IndexError):
    """Raised when shifting a line from an empty cursor."""

    def __init__(self) -> None:
        super().__init__("shift() called on an exhausted line cursor")


class ConfigError(PatternDocError):
    """Raised for invalid parser configuration."""

    pass

"""Field grammar registry.

The recognized tags form a closed set. ``FieldKind`` lists them in
matching order, and each kind dispatches to a handler that reads its
value from the cursor and stores it on the current pattern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from patterndoc.config import ParserConfig
from patterndoc.cursor import LineCursor
from patterndoc.errors import MalformedParameterError
from patterndoc.models import CodeBlock, Pattern, PatternParameter
from patterndoc.readers import (
    extract_code_blocks,
    read_key_value,
    read_multiline,
    read_single_line,
    tag_regex,
)

logger = logging.getLogger(__name__)


# nameSpec [-] description, following the "{type}" prefix. nameSpec is
# "name", "[name]" or "[name=default]".
PARAMETER_RE = re.compile(
    r"^\s*(?P<name>\[[^\]]*\]|\S+)"
    r"\s*(?:-)?\s*"
    r"(?P<description>.*)$",
    re.DOTALL,
)

PARAMETER_NAME_RE = re.compile(
    r"^(?P<bracket>\[)?\s*(?P<name>[^=\[\]]+?)\s*"
    r"(?:=\s*(?P<default>[^\]]*?))?\s*(?(bracket)\])$"
)


class FieldKind(Enum):
    """Recognized field tags, in matching order."""

    NAME = "@pattern"
    DESCRIPTION = "@description"
    PARAMETER = "@param"
    EXAMPLE = "@example"
    META = "@meta"
    TODO = "@todo"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def starts_record(self) -> bool:
        """Whether a match on this field opens a new pattern."""
        return self is FieldKind.NAME

    def matches(self, line: str) -> bool:
        """Check whether ``line`` begins this field."""
        return tag_regex(self.tag).match(line) is not None

    def parse(self, cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
        """Consume this field from ``cursor`` and store it on ``pattern``."""
        _HANDLERS[self](cursor, pattern, context)


def match_field(line: str) -> FieldKind | None:
    """Return the first field kind that ``line`` begins, if any."""
    for kind in FieldKind:
        if kind.matches(line):
            return kind
    return None


def is_field_line(line: str) -> bool:
    return match_field(line) is not None


@dataclass
class ParseContext:
    """State shared by the handlers while one source text is parsed."""

    config: ParserConfig = field(default_factory=ParserConfig)


def parse_parameter(text: str, pattern_name: str | None = None) -> PatternParameter:
    """Parse the value of a ``@param`` field.

    Raises:
        MalformedParameterError: If ``text`` is not ``{type} name - description``
    """
    split = _split_type(text)
    if split is None:
        raise MalformedParameterError(text, pattern_name)
    type_text, rest = split

    match = PARAMETER_RE.match(rest)
    if match is None:
        raise MalformedParameterError(text, pattern_name)

    name_match = PARAMETER_NAME_RE.match(match.group("name"))
    if name_match is None:
        raise MalformedParameterError(text, pattern_name)

    default = name_match.group("default")
    return PatternParameter(
        name=name_match.group("name"),
        type=type_text.strip(),
        description=match.group("description").strip(),
        default_value=default.strip() if default is not None else None,
        optional=name_match.group("bracket") is not None,
    )


def _split_type(text: str) -> tuple[str, str] | None:
    """Split ``{type}rest`` at the brace closing the opening one.

    Braces nest, so ``{Object.<string, {a: Number}>}`` is one type. Returns
    None when the text does not open with a balanced brace group.
    """
    text = text.lstrip()
    if not text.startswith("{"):
        return None

    depth = 0
    for i, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[1:i], text[i + 1:]
    return None


# =============================================================================
# Handlers
# =============================================================================


def _parse_name(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    pattern.name = read_single_line(cursor, FieldKind.NAME.tag)


def _parse_description(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    pattern.description = read_multiline(cursor, FieldKind.DESCRIPTION.tag, is_field_line)


def _parse_parameter(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    text = read_single_line(cursor, FieldKind.PARAMETER.tag)
    try:
        parameter = parse_parameter(text, pattern.name)
    except MalformedParameterError as e:
        if context.config.strict:
            raise
        logger.warning("Skipping parameter: %s", e)
        return
    pattern.add_parameter(parameter)


def _parse_example(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    description = read_single_line(cursor, FieldKind.EXAMPLE.tag)

    code_blocks = []
    if cursor and not is_field_line(cursor.peek()):
        body = read_multiline(cursor, None, is_field_line, preserve_whitespace=True)
        code_blocks = extract_code_blocks(body)
        if not code_blocks and body.strip():
            code_blocks = [CodeBlock(code=body)]

    pattern.add_example(description, code_blocks)


def _parse_meta(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    key, value = read_key_value(cursor, FieldKind.META.tag)
    if key is None:
        logger.debug("Ignoring @meta without a key/value pair in pattern '%s'", pattern.name)
        return

    if key in context.config.accumulate_meta_keys:
        pattern.append_meta(key, value)
    else:
        pattern.set_meta(key, value)


def _parse_todo(cursor: LineCursor, pattern: Pattern, context: ParseContext) -> None:
    text = read_multiline(cursor, FieldKind.TODO.tag, is_field_line)
    if text:
        pattern.append_meta("todo", text)


_HANDLERS: dict[FieldKind, Callable[[LineCursor, Pattern, ParseContext], None]] = {
    FieldKind.NAME: _parse_name,
    FieldKind.DESCRIPTION: _parse_description,
    FieldKind.PARAMETER: _parse_parameter,
    FieldKind.EXAMPLE: _parse_example,
    FieldKind.META: _parse_meta,
    FieldKind.TODO: _parse_todo,
}

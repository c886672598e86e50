"""Field value readers.

Each reader consumes lines from a ``LineCursor`` and returns the value
of one field. The single-line readers consume exactly one line; the
multi-line reader consumes lines until the cursor runs out or the next
field begins, and pushes that line back for the next field.

Example:
    from patterndoc.cursor import LineCursor
    from patterndoc.readers import read_multiline

    cursor = LineCursor.from_text(" * @description First line\\n * second line")
    read_multiline(cursor, "@description", stop_at=lambda line: False)
    # "First line second line"
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable

from patterndoc.cursor import LineCursor
from patterndoc.models import CodeBlock

# One leading "*" decoration per line, plus the space that follows it.
BORDER_MARKER_RE = re.compile(r"^[ \t]*\*(?!/)[ \t]?")

LEADING_WHITESPACE_RE = re.compile(r"^[ \t]*")

# "key value" or "key - value"
KEY_VALUE_RE = re.compile(r"^(?P<key>\S+)\s+(?:-(?:\s+|$))?(?P<value>.*)$", re.DOTALL)

FENCE_OPEN_RE = re.compile(r"^[ \t]*```(?P<syntax>[^\s`]*)")
FENCE_CLOSE_RE = re.compile(r"^[ \t]*```[ \t]*$")


@lru_cache(maxsize=None)
def tag_regex(tag: str) -> re.Pattern[str]:
    """Regex matching border characters and ``tag`` at the start of a line."""
    return re.compile(r"^[\s*]*" + re.escape(tag) + r"\b[ \t]*")


def strip_tag(text: str, tag: str | None) -> str:
    """Remove leading border characters and ``tag`` from the front of ``text``."""
    if not tag:
        return text
    return tag_regex(tag).sub("", text, count=1)


def read_single_line(cursor: LineCursor, tag: str) -> str:
    """Consume one line and return its value after the tag token."""
    line = cursor.shift()
    match = tag_regex(tag).match(line)
    if match is None:
        return line.lstrip(" \t*").strip()
    return line[match.end():].strip()


def read_key_value(cursor: LineCursor, tag: str) -> tuple[str | None, str | None]:
    """Consume one line and split its value into ``(key, value)``.

    The value may be separated from the key by a dash. Returns
    ``(None, None)`` when there is no whitespace to split on.
    """
    text = read_single_line(cursor, tag)
    match = KEY_VALUE_RE.match(text)
    if match is None:
        return None, None
    return match.group("key"), match.group("value").strip()


def read_multiline(
    cursor: LineCursor,
    tag: str | None,
    stop_at: Callable[[str], bool],
    preserve_whitespace: bool = False,
) -> str:
    """Consume lines until exhaustion or the start of another field.

    Args:
        cursor: Lines to read from; the first line usually carries ``tag``
        tag: Tag token to strip from the front of the result, if any
        stop_at: Predicate identifying a line that starts a field
        preserve_whitespace: Keep indentation and blank lines verbatim
            instead of folding lines into paragraphs

    Returns:
        The de-indented field value
    """
    parts: list[str] = []

    while cursor:
        line = cursor.shift()

        if parts and stop_at(line):
            cursor.unshift(line)
            break

        line = BORDER_MARKER_RE.sub("", line, count=1)
        parts.append(line.rstrip() if preserve_whitespace else line.strip())

    if preserve_whitespace:
        text = "\n".join(parts)
    else:
        text = _fold_paragraphs(parts)

    text = strip_common_indent(strip_tag(text, tag))
    if preserve_whitespace:
        return text.strip("\n")
    return text.strip()


def _fold_paragraphs(parts: list[str]) -> str:
    """Join lines with spaces; blank lines become a single newline."""
    paragraphs: list[str] = []
    current: list[str] = []

    for part in parts:
        if part:
            current.append(part)
        elif current:
            paragraphs.append(" ".join(current))
            current = []

    if current:
        paragraphs.append(" ".join(current))

    return "\n".join(paragraphs)


def strip_common_indent(text: str) -> str:
    """Remove the leading whitespace shared by every non-blank line.

    The longest common prefix of a set of strings is the common prefix of
    its lexicographic minimum and maximum, so only those two are compared.
    """
    lines = text.split("\n")
    indents = sorted({
        LEADING_WHITESPACE_RE.match(line).group(0)
        for line in lines
        if line.strip()
    })
    if not indents:
        return text

    first, last = indents[0], indents[-1]
    size = 0
    for a, b in zip(first, last):
        if a != b:
            break
        size += 1

    if size == 0:
        return text

    prefix = first[:size]
    return "\n".join(
        line[size:] if line.startswith(prefix) else line.lstrip(" \t")
        for line in lines
    )


def extract_code_blocks(text: str) -> list[CodeBlock]:
    """Extract fenced code blocks in source order.

    The opening fence may carry a language tag. Fence lines are dropped and
    each block's code is de-indented. An unclosed fence runs to the end.
    """
    blocks: list[CodeBlock] = []
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        match = FENCE_OPEN_RE.match(lines[i])
        if not match:
            i += 1
            continue

        body: list[str] = []
        i += 1
        while i < len(lines) and not FENCE_CLOSE_RE.match(lines[i]):
            body.append(lines[i])
            i += 1
        i += 1  # Skip the closing fence

        blocks.append(CodeBlock(
            code=strip_common_indent("\n".join(body)),
            syntax=match.group("syntax") or None,
        ))

    return blocks

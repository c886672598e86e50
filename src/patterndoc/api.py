"""Main API functions for patterndoc."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from patterndoc.config import ParserConfig
from patterndoc.models import Pattern
from patterndoc.parser import PatternDocParser

logger = logging.getLogger(__name__)


def parse(source: str, config: ParserConfig | None = None) -> list[Pattern]:
    """Parse pattern documentation from source text.

    Args:
        source: Source text containing ``/* ... */`` comment blocks
        config: Optional parser configuration

    Returns:
        Merged patterns in first-seen order

    Example:
        >>> import patterndoc
        >>> patterns = patterndoc.parse("/* @pattern Card */")
        >>> patterns[0].name
        'Card'
    """
    return PatternDocParser(config).parse(source)


def parse_file(path: str | Path, config: ParserConfig | None = None) -> list[Pattern]:
    """Parse pattern documentation from a single file."""
    return parse_files([path], config)


def parse_files(
    paths: Iterable[str | Path],
    config: ParserConfig | None = None,
) -> list[Pattern]:
    """Parse several files and merge same-named patterns across them.

    Files are read with ``config.encoding`` and merged in argument order.
    """
    parser = PatternDocParser(config)
    partials: list[Pattern] = []

    for path in paths:
        path = Path(path)
        source = path.read_text(encoding=parser.config.encoding)
        found = parser.parse_partials(source)
        logger.info("Parsed %d pattern block(s) from %s", len(found), path)
        partials.extend(found)

    return Pattern.merge(partials)

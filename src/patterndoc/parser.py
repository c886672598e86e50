"""Pattern documentation parser.

Extracts ``Pattern`` records from ``/* ... */`` comment blocks tagged with
``@pattern``, ``@description``, ``@param``, ``@example``, ``@meta`` and
``@todo``.

Example:
    from patterndoc.parser import PatternDocParser

    parser = PatternDocParser()
    patterns = parser.parse('''
        /**
         * @pattern Button
         * @description A clickable button
         * @param {String} label - Button text
         * @param {String} [variant=primary] - Visual style
         */
    ''')

    print(patterns[0].parameters[1].default_value)  # "primary"
"""

from __future__ import annotations

import logging

from patterndoc.blocks import iter_comment_blocks
from patterndoc.config import ParserConfig
from patterndoc.cursor import LineCursor
from patterndoc.fields import ParseContext, match_field
from patterndoc.models import Pattern

logger = logging.getLogger(__name__)


class PatternDocParser:
    """Parser for pattern documentation comments.

    Each comment block is scanned line by line. A ``@pattern`` line opens a
    new record, later fields in the block are stored on the open record, and
    any other line is skipped. Records sharing a name are merged across
    blocks.

    Attributes:
        config: Parser configuration
    """

    def __init__(self, config: ParserConfig | None = None):
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
        """
        self.config = config or ParserConfig()

    def parse(self, source: str) -> list[Pattern]:
        """Parse patterns from source text.

        Args:
            source: Source text containing comment blocks

        Returns:
            Merged patterns in first-seen order

        Raises:
            MalformedParameterError: If a ``@param`` line is malformed and
                the parser is strict
        """
        return Pattern.merge(self.parse_partials(source))

    def parse_partials(self, source: str) -> list[Pattern]:
        """Parse every comment block without merging same-named records."""
        context = ParseContext(config=self.config)
        partials: list[Pattern] = []

        for block in iter_comment_blocks(source):
            partials.extend(self.parse_block(block, context))

        return partials

    def parse_block(self, block: str, context: ParseContext | None = None) -> list[Pattern]:
        """Parse the interior of a single comment block.

        Args:
            block: Comment block text without its delimiters
            context: Shared parse state (created from ``config`` if omitted)

        Returns:
            Partial patterns in source order, one per ``@pattern`` line
        """
        context = context or ParseContext(config=self.config)
        cursor = LineCursor.from_text(block)
        patterns: list[Pattern] = []
        current: Pattern | None = None

        while cursor:
            kind = match_field(cursor.peek())

            if kind is not None and kind.starts_record:
                current = Pattern()
                patterns.append(current)

            if kind is not None and current is not None:
                kind.parse(cursor, current, context)
            else:
                if kind is not None:
                    logger.debug("Skipping %s outside of a pattern", kind.tag)
                cursor.shift()

        return patterns


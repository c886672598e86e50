"""Comment block extraction.

Finds ``/* ... */`` spans in arbitrary source text and strips the
decorative border runs at their outer edges. Per-line ``*`` decoration
inside a block is left for the field readers.
"""

from __future__ import annotations

import re
from typing import Iterator

# Open token plus its border run, a lazy body, then the border run and close
# token. The first "*/" after an open token always closes the block.
COMMENT_BLOCK_RE = re.compile(
    r"/\*[\s*=-]*(?P<body>.*?)[\s*=-]*\*/",
    re.DOTALL,
)


def iter_comment_blocks(text: str) -> Iterator[str]:
    """Yield the interior of every comment block in ``text``.

    The iterator is lazy and single-use. Text without comment blocks, or
    with only an unterminated ``/*``, yields nothing.
    """
    for match in COMMENT_BLOCK_RE.finditer(text):
        yield match.group("body")

"""Tests for comment block extraction."""

import types

from patterndoc.blocks import iter_comment_blocks


class TestIterCommentBlocks:
    """Tests for iter_comment_blocks."""

    def test_no_blocks(self):
        """Test text without comments yields nothing."""
        assert list(iter_comment_blocks("const a = 1;\n")) == []

    def test_empty_text(self):
        """Test empty text yields nothing."""
        assert list(iter_comment_blocks("")) == []

    def test_returns_lazy_iterator(self):
        """Test the result is a single-use generator."""
        blocks = iter_comment_blocks("/* a */ /* b */")

        assert isinstance(blocks, types.GeneratorType)
        assert list(blocks) == ["a", "b"]
        assert list(blocks) == []

    def test_strips_outer_borders(self):
        """Test decorative runs are removed from both edges."""
        text = (
            "/* ----------------------------------------\n"
            " * @pattern A\n"
            " * ---------------------------------------- */"
        )

        assert list(iter_comment_blocks(text)) == ["@pattern A"]

    def test_strips_equals_and_stars(self):
        """Test '=' and '*' border runs are stripped."""
        text = "/**====\n@pattern A\n====**/"

        assert list(iter_comment_blocks(text)) == ["@pattern A"]

    def test_interior_decoration_kept(self):
        """Test per-line '*' decoration inside a block is left alone."""
        text = "/**\n * @pattern A\n * @description D\n */"

        assert list(iter_comment_blocks(text)) == ["@pattern A\n * @description D"]

    def test_first_close_wins(self):
        """Test a block ends at the nearest close token."""
        text = "/* outer /* inner */ trailing */"

        assert list(iter_comment_blocks(text)) == ["outer /* inner"]

    def test_unterminated_block(self):
        """Test an open token without a close yields nothing."""
        assert list(iter_comment_blocks("/* never closed\n@pattern A")) == []

    def test_multiple_blocks_in_order(self):
        """Test several blocks are returned in source order."""
        text = "/* one */\ncode();\n/* two */\n// line\n/* three */"

        assert list(iter_comment_blocks(text)) == ["one", "two", "three"]

    def test_empty_block(self):
        """Test an empty comment yields an empty body."""
        assert list(iter_comment_blocks("/**/")) == [""]

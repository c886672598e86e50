"""Tests for the field grammar registry."""

import logging

import pytest

from patterndoc.config import ParserConfig
from patterndoc.cursor import LineCursor
from patterndoc.errors import MalformedParameterError
from patterndoc.fields import FieldKind, ParseContext, match_field, parse_parameter
from patterndoc.models import CodeBlock, ListMeta, Pattern, ScalarMeta


class TestMatchField:
    """Tests for field matching."""

    @pytest.mark.parametrize("line,expected", [
        (" * @pattern Button", FieldKind.NAME),
        ("@description text", FieldKind.DESCRIPTION),
        ("   * @param {Number} x", FieldKind.PARAMETER),
        (" *  * @example Usage", FieldKind.EXAMPLE),
        ("@meta key value", FieldKind.META),
        (" * @todo later", FieldKind.TODO),
        ("@pattern", FieldKind.NAME),
    ])
    def test_matches_tags(self, line, expected):
        """Test each tag is recognized after border characters."""
        assert match_field(line) is expected

    @pytest.mark.parametrize("line", [
        "",
        " * plain text",
        " * @parameter {Number} x",
        " * @patterns Plural",
        " * see @param {Number} x",
        "```",
    ])
    def test_non_matching_lines(self, line):
        """Test word boundaries and line starts are enforced."""
        assert match_field(line) is None

    def test_name_field_first(self):
        """Test the name field is checked before all others."""
        assert list(FieldKind)[0] is FieldKind.NAME
        assert FieldKind.NAME.starts_record
        assert not any(kind.starts_record for kind in list(FieldKind)[1:])


class TestParseParameter:
    """Tests for @param grammar."""

    def test_required(self):
        """Test a bare name has no default."""
        param = parse_parameter("{Number} paramA - Required parameter")

        assert param.name == "paramA"
        assert param.type == "Number"
        assert param.description == "Required parameter"
        assert param.default_value is None
        assert param.optional is False

    def test_optional(self):
        """Test a bracketed name without default."""
        param = parse_parameter("{Object} [paramB] - Optional parameter")

        assert param.name == "paramB"
        assert param.type == "Object"
        assert param.default_value is None
        assert param.optional is True

    def test_default_with_spaces(self):
        """Test a bracketed default may contain spaces."""
        param = parse_parameter("{String} [paramC=some default] - desc")

        assert param.name == "paramC"
        assert param.type == "String"
        assert param.default_value == "some default"
        assert param.description == "desc"

    def test_empty_default_is_not_absent(self):
        """Test an empty default differs from no default."""
        param = parse_parameter("{String} [label=] - desc")

        assert param.default_value == ""

    def test_dash_optional(self):
        """Test the separating dash may be omitted."""
        param = parse_parameter("{Boolean} disabled Whether the control is inert")

        assert param.name == "disabled"
        assert param.description == "Whether the control is inert"

    def test_no_space_after_type(self):
        """Test the name may follow the closing brace directly."""
        param = parse_parameter("{Number}x - desc")

        assert param.name == "x"
        assert param.type == "Number"
        assert param.description == "desc"

    def test_dash_attached_to_description(self):
        """Test the separating dash is removed without a following space."""
        param = parse_parameter("{Number} x -desc")

        assert param.name == "x"
        assert param.description == "desc"

    def test_default_surrounding_whitespace(self):
        """Test whitespace around "=" and the default is trimmed."""
        param = parse_parameter("{Number} [x = 5] - d")

        assert param.name == "x"
        assert param.default_value == "5"
        assert param.optional is True

    def test_no_description(self):
        """Test a parameter without description."""
        param = parse_parameter("{Number} count")

        assert param.name == "count"
        assert param.description == ""

    def test_complex_type(self):
        """Test types with spaces and nested braces."""
        param = parse_parameter("{Object.<string, {a: Number}>} map - Lookup { not a type }")

        assert param.type == "Object.<string, {a: Number}>"
        assert param.name == "map"
        assert param.description == "Lookup { not a type }"

    def test_union_type(self):
        """Test a union type with spaces."""
        param = parse_parameter("{string | number} value - The value")

        assert param.type == "string | number"
        assert param.name == "value"

    @pytest.mark.parametrize("text", [
        "NotAParam",
        "Number x - missing braces",
        "{Number}",
        "{Number x - unclosed type",
        "{Number} [broken - unbalanced",
    ])
    def test_malformed(self, text):
        """Test malformed declarations raise."""
        with pytest.raises(MalformedParameterError) as exc_info:
            parse_parameter(text, "Widget")

        assert exc_info.value.line == text
        assert exc_info.value.pattern_name == "Widget"
        assert "Widget" in str(exc_info.value)


class TestHandlers:
    """Tests for FieldKind.parse dispatch."""

    def test_parameter_strict_raises(self):
        """Test a malformed parameter is fatal by default."""
        cursor = LineCursor([" * @param NotAParam"])

        with pytest.raises(MalformedParameterError):
            FieldKind.PARAMETER.parse(cursor, Pattern(name="P"), ParseContext())

    def test_parameter_lenient_skips(self, caplog):
        """Test a malformed parameter is logged and skipped when lenient."""
        cursor = LineCursor([" * @param NotAParam", " * @param {Number} x - X"])
        pattern = Pattern(name="P")
        context = ParseContext(config=ParserConfig(strict=False))

        with caplog.at_level(logging.WARNING, logger="patterndoc.fields"):
            FieldKind.PARAMETER.parse(cursor, pattern, context)
            FieldKind.PARAMETER.parse(cursor, pattern, context)

        assert [p.name for p in pattern.parameters] == ["x"]
        assert "NotAParam" in caplog.text

    def test_meta_scalar_overrides(self):
        """Test plain @meta keys keep the latest value."""
        cursor = LineCursor(["@meta status draft", "@meta status stable"])
        pattern = Pattern(name="P")

        FieldKind.META.parse(cursor, pattern, ParseContext())
        FieldKind.META.parse(cursor, pattern, ParseContext())

        assert pattern.metadata == {"status": ScalarMeta("stable")}

    def test_meta_accumulating_key(self):
        """Test configured keys collect into a list."""
        cursor = LineCursor(["@meta todo first", "@meta todo second"])
        pattern = Pattern(name="P")
        context = ParseContext()

        FieldKind.META.parse(cursor, pattern, context)
        FieldKind.META.parse(cursor, pattern, context)

        assert pattern.metadata == {"todo": ListMeta(("first", "second"))}

    def test_meta_degenerate_is_noop(self):
        """Test a @meta line without a value changes nothing."""
        cursor = LineCursor(["@meta lonely"])
        pattern = Pattern(name="P")

        FieldKind.META.parse(cursor, pattern, ParseContext())

        assert pattern.metadata == {}
        assert not cursor

    def test_todo_accumulates(self):
        """Test @todo appends multi-line text under the todo key."""
        cursor = LineCursor([" * @todo Support", " *   icons", " * @todo Dark mode"])
        pattern = Pattern(name="P")

        FieldKind.TODO.parse(cursor, pattern, ParseContext())
        FieldKind.TODO.parse(cursor, pattern, ParseContext())

        assert pattern.get_meta("todo") == ["Support icons", "Dark mode"]

    def test_example_without_body(self):
        """Test an example followed directly by another field."""
        cursor = LineCursor([" * @example Nothing to show", " * @param {Number} x - X"])
        pattern = Pattern(name="P")

        FieldKind.EXAMPLE.parse(cursor, pattern, ParseContext())

        assert pattern.examples[0].description == "Nothing to show"
        assert pattern.examples[0].code_blocks == []
        assert cursor.peek() == " * @param {Number} x - X"

    def test_example_without_fence(self):
        """Test an unfenced example body becomes one untagged block."""
        cursor = LineCursor([" * @example Inline", " *   render(x)"])
        pattern = Pattern(name="P")

        FieldKind.EXAMPLE.parse(cursor, pattern, ParseContext())

        assert pattern.examples[0].code_blocks == [CodeBlock(code="render(x)")]

"""
Tests for the reference mini-language.

Tests cover:
- Alias and interpolation parsing
- Rejection of malformed and legacy references
- Text substitution
"""

import pytest

from chuk_mcp_tokens.errors import MalformedDocument
from chuk_mcp_tokens.models.token import TokenPath
from chuk_mcp_tokens.store.references import parse_value, substitute


class TestParseValue:
    """Tests for parse_value."""

    def test_literal_string(self):
        """Strings without braces are literals."""
        parsed = parse_value("#3b82f6", "color.blue.500", "test")
        assert parsed.value == "#3b82f6"
        assert parsed.references == ()
        assert parsed.alias is False

    def test_number_is_literal(self):
        """Numbers never carry references."""
        parsed = parse_value(1.5, "line-height", "test")
        assert parsed.value == 1.5
        assert parsed.references == ()

    def test_alias(self):
        """A value that is exactly one reference is an alias."""
        parsed = parse_value("{color.blue.500}", "color.text.primary", "test")
        assert parsed.alias is True
        assert parsed.references == (TokenPath(("color", "blue", "500")),)

    def test_alias_with_surrounding_whitespace(self):
        """Whitespace around a lone reference still makes an alias."""
        parsed = parse_value("  {color.blue.500} ", "x", "test")
        assert parsed.alias is True

    def test_slash_delimited_reference(self):
        """Slash-delimited paths parse to the same segments."""
        parsed = parse_value("{color/blue/500}", "x", "test")
        assert parsed.references == (TokenPath(("color", "blue", "500")),)

    def test_interpolation(self):
        """References embedded in text are interpolations."""
        parsed = parse_value("1px solid {color.border.default}", "border", "test")
        assert parsed.alias is False
        assert [ref.dotted for ref in parsed.references] == ["color.border.default"]

    def test_multiple_references_in_order(self):
        """References are returned in order of appearance."""
        parsed = parse_value("{spacing.2} {spacing.4}", "padding", "test")
        assert [ref.dotted for ref in parsed.references] == ["spacing.2", "spacing.4"]
        assert parsed.alias is False

    def test_legacy_reference_rejected(self):
        """$-prefixed references are malformed, with a suggested fix."""
        with pytest.raises(MalformedDocument) as exc_info:
            parse_value("$color.text.primary", "x", "semantic/color.json")
        assert "{color.text.primary}" in str(exc_info.value)
        assert exc_info.value.source == "semantic/color.json"

    def test_dollar_amount_is_literal(self):
        """A dollar sign that is not a path stays a literal."""
        assert parse_value("$5", "price", "test").value == "$5"

    def test_empty_reference_rejected(self):
        """Empty braces are malformed."""
        with pytest.raises(MalformedDocument):
            parse_value("{}", "x", "test")

    def test_empty_segment_rejected(self):
        """Paths with empty segments are malformed."""
        with pytest.raises(MalformedDocument):
            parse_value("{color..blue}", "x", "test")

    def test_unbalanced_brace_rejected(self):
        """A stray brace is malformed."""
        with pytest.raises(MalformedDocument):
            parse_value("{color.blue.500", "x", "test")

    def test_nested_braces_rejected(self):
        """Nested braces are malformed."""
        with pytest.raises(MalformedDocument):
            parse_value("{{color.blue}}", "x", "test")


class TestSubstitute:
    """Tests for substitute."""

    def test_replaces_each_reference(self):
        """Every reference is replaced with its value as text."""
        values = {"spacing-2": "8px", "color-border": "#e5e7eb"}
        result = substitute(
            "{spacing.2} solid {color.border}", lambda path: values[path.name]
        )
        assert result == "8px solid #e5e7eb"

    def test_numbers_render_without_trailing_zero(self):
        """Float values render as they would in a stylesheet."""
        result = substitute("calc({scale} * 2)", lambda path: 1.0)
        assert result == "calc(1 * 2)"

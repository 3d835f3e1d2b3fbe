"""
Tests for the markup template parser.
"""

import pytest

from viewkit.renderers.markup.nodes import (
    CloseSectionNode, CommitNode, ConditionalBlockNode, ExtendsNode, IncludeNode,
    LiteralValue, OpenSectionNode, SuperNode, TextNode, VariableNode, VariableValue,
)
from viewkit.renderers.markup.parser import ParserError, parse_template


class TestBasicNodes:

    def test_text_and_variables(self):
        assert parse_template("Hi ${ user.name }!") == [
            TextNode("Hi "),
            VariableNode(("user", "name")),
            TextNode("!"),
        ]

    def test_comments_are_dropped(self):
        assert parse_template("a{# hidden #}b") == [TextNode("a"), TextNode("b")]

    def test_section_directives_stay_flat(self):
        ast = parse_template(
            "{% extends base %}{% section body %}x{% super %}y{% endsection %}{% commit body %}{% commit %}"
        )
        assert ast == [
            ExtendsNode("base"),
            OpenSectionNode("body"),
            TextNode("x"),
            SuperNode(),
            TextNode("y"),
            CloseSectionNode(),
            CommitNode("body"),
            CommitNode(None),
        ]

    def test_quoted_names(self):
        assert parse_template('{% extends "layouts/main" %}') == [ExtendsNode("layouts/main")]


class TestInclude:

    def test_plain_include_passes_context_through(self):
        assert parse_template("{% include part %}") == [IncludeNode("part", None, True)]

    def test_include_with_data(self):
        assert parse_template('{% include part with b="hello" c=user.name %}') == [
            IncludeNode("part", (("b", LiteralValue("hello")), ("c", VariableValue(("user", "name")))), True)
        ]

    def test_include_with_only(self):
        assert parse_template('{% include part with b="x" only %}') == [
            IncludeNode("part", (("b", LiteralValue("x")),), False)
        ]

    def test_include_only_without_data(self):
        assert parse_template("{% include part only %}") == [IncludeNode("part", (), False)]

    @pytest.mark.parametrize(
        "source",
        [
            "{% include %}",
            "{% include part extra %}",
            "{% include part with %}",
            "{% include part with a %}",
            "{% include part with a b c %}",
            '{% include part with a="x" b= %}',
        ],
    )
    def test_malformed_include(self, source: str):
        with pytest.raises(ParserError):
            parse_template(source)


class TestConditionals:

    def test_if_else(self):
        assert parse_template("{% if name %}A{% else %}B{% endif %}") == [
            ConditionalBlockNode(("name",), [TextNode("A")], False, [TextNode("B")])
        ]

    def test_if_not(self):
        assert parse_template("{% if not user.admin %}x{% endif %}") == [
            ConditionalBlockNode(("user", "admin"), [TextNode("x")], True, [])
        ]

    def test_nested_if(self):
        ast = parse_template("{% if a %}{% if b %}x{% endif %}{% endif %}")
        assert ast == [
            ConditionalBlockNode(("a",), [ConditionalBlockNode(("b",), [TextNode("x")])])
        ]

    def test_sections_inside_if(self):
        ast = parse_template("{% if a %}{% section s %}x{% endsection %}{% endif %}")
        assert ast[0].body == [OpenSectionNode("s"), TextNode("x"), CloseSectionNode()]

    def test_unclosed_if(self):
        with pytest.raises(ParserError, match="Unclosed block"):
            parse_template("{% if a %}x")

    def test_unclosed_else(self):
        with pytest.raises(ParserError, match="Unclosed block, expected endif"):
            parse_template("{% if a %}x{% else %}y")

    @pytest.mark.parametrize("source", ["{% endif %}", "{% else %}"])
    def test_stray_block_end(self, source: str):
        with pytest.raises(ParserError, match="without a matching 'if'"):
            parse_template(source)


class TestErrors:

    @pytest.mark.parametrize(
        "source, message",
        [
            ("{% %}", "Empty directive"),
            ("{% frobnicate %}", "Unknown directive"),
            ("{% extends %}", "expects exactly one name"),
            ("{% section a b %}", "expects exactly one name"),
            ("{% endsection now %}", "takes no arguments"),
            ("${ 1abc }", "Invalid variable reference"),
            ("${}", "Invalid variable reference"),
        ],
    )
    def test_messages(self, source: str, message: str):
        with pytest.raises(ParserError, match=message):
            parse_template(source)

    def test_error_carries_position(self):
        with pytest.raises(ParserError) as exc:
            parse_template("line\n{% nope %}")
        assert exc.value.line == 2

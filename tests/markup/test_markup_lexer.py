"""
Tests for the markup template lexer.

Checks tokenization of:
- plain text
- placeholders ${...}
- directives {% ... %} and their content
- comments {# ... #}
"""

import pytest

from viewkit.renderers.markup.lexer import LexerError, TemplateLexer, TokenType, tokenize_template


class TestTemplateLexer:
    """Top-level tokenization."""

    def test_empty_template(self):
        """An empty template yields only EOF."""
        tokens = tokenize_template("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert (tokens[0].line, tokens[0].column) == (1, 1)

    def test_plain_text(self):
        tokens = tokenize_template("Hello, world!")
        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == "Hello, world!"

    def test_mixed_content(self):
        tokens = tokenize_template("a${x}b{% super %}c{# note #}d")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.TEXT, "a"),
            (TokenType.PLACEHOLDER, "x"),
            (TokenType.TEXT, "b"),
            (TokenType.DIRECTIVE, " super "),
            (TokenType.TEXT, "c"),
            (TokenType.COMMENT, " note "),
            (TokenType.TEXT, "d"),
            (TokenType.EOF, ""),
        ]

    def test_positions_track_lines(self):
        tokens = tokenize_template("line 1\nline 2 ${name}\n")
        placeholder = tokens[1]
        assert placeholder.type == TokenType.PLACEHOLDER
        assert (placeholder.line, placeholder.column) == (2, 8)
        assert placeholder.position == 14

    def test_lone_braces_are_text(self):
        tokens = tokenize_template("{ } $ {x} %}")
        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]

    @pytest.mark.parametrize(
        "text, label",
        [("${x", "placeholder"), ("{% section a", "directive"), ("{# never closed", "comment")],
    )
    def test_unclosed_constructs(self, text: str, label: str):
        with pytest.raises(LexerError, match=f"Unclosed {label}"):
            tokenize_template(text)

    def test_error_position(self):
        with pytest.raises(LexerError) as exc:
            tokenize_template("ok\n  ${oops")
        assert (exc.value.line, exc.value.column) == (2, 3)


class TestDirectiveContent:
    """Tokenization inside {% ... %}."""

    def _words(self, source: str):
        lexer = TemplateLexer(source)
        directive = lexer.tokenize()[0]
        return lexer.tokenize_directive_content(directive)

    def test_identifiers_with_paths(self):
        words = self._words("{% extends layouts/base-page.v2 %}")
        assert [(w.type, w.value) for w in words] == [
            (TokenType.IDENTIFIER, "extends"),
            (TokenType.IDENTIFIER, "layouts/base-page.v2"),
        ]

    def test_strings_and_equals(self):
        words = self._words('{% include part with a="x \\"y\\"" b=\'z\' %}')
        assert [(w.type, w.value) for w in words] == [
            (TokenType.IDENTIFIER, "include"),
            (TokenType.IDENTIFIER, "part"),
            (TokenType.IDENTIFIER, "with"),
            (TokenType.IDENTIFIER, "a"),
            (TokenType.EQUALS, "="),
            (TokenType.STRING, 'x "y"'),
            (TokenType.IDENTIFIER, "b"),
            (TokenType.EQUALS, "="),
            (TokenType.STRING, "z"),
        ]

    def test_word_positions_point_into_source(self):
        words = self._words("{% section body %}")
        assert words[1].position == 11
        assert words[1].column == 12

    def test_unexpected_character(self):
        with pytest.raises(LexerError, match="Unexpected character"):
            self._words("{% if a > b %}")

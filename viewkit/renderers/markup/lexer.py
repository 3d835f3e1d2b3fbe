"""
Lexical analyzer for markup view templates.

Splits the template source into text, placeholders ``${...}``,
directives ``{% ... %}`` and comments ``{# ... #}``, and tokenizes the
inside of a directive into identifiers, strings and ``=``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List

from ...errors import ViewsUserError


class TokenType(enum.Enum):
    """Token types of a template."""

    # Top level
    TEXT = "TEXT"
    PLACEHOLDER = "PLACEHOLDER"      # ${ ... }
    DIRECTIVE = "DIRECTIVE"          # {% ... %}
    COMMENT = "COMMENT"              # {# ... #}
    EOF = "EOF"

    # Inside directives
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    EQUALS = "EQUALS"                # =


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error diagnostics.

    For PLACEHOLDER/DIRECTIVE/COMMENT the value is the inner content,
    without the delimiters.
    """
    type: TokenType
    value: str
    position: int       # Offset in the source text
    line: int           # 1-based
    column: int         # 1-based

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class TemplateSyntaxError(ViewsUserError):
    """Lexing or parsing error in a markup template."""

    def __init__(self, message: str, line: int, column: int, position: int = -1):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column
        self.position = position


class LexerError(TemplateSyntaxError):
    """Lexical analysis error."""
    pass


class TemplateLexer:
    """
    Template lexer.

    Recognizes the following contexts:
    - plain text
    - placeholders ${...}
    - directives {% ... %}
    - comments {# ... #}
    """

    _OPENERS = re.compile(r'\$\{|\{%|\{#')

    _CLOSERS = {
        '${': ('}', TokenType.PLACEHOLDER, "placeholder"),
        '{%': ('%}', TokenType.DIRECTIVE, "directive"),
        '{#': ('#}', TokenType.COMMENT, "comment"),
    }

    # Directive content
    _WHITESPACE = re.compile(r'\s+')
    _STRING = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'')
    _EQUALS = re.compile(r'=')
    # Letters, digits, underscore, dash, slash, dot
    _IDENTIFIER = re.compile(r'[A-Za-z0-9_\-/.]+')
    _ESCAPE = re.compile(r'\\(.)')

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source text.

        Returns:
            Top-level tokens terminated by EOF

        Raises:
            LexerError: On an unterminated placeholder, directive or comment
        """
        tokens: List[Token] = []

        while self.position < self.length:
            match = self._OPENERS.search(self.text, self.position)
            text_end = match.start() if match else self.length

            if text_end > self.position:
                tokens.append(self._token(TokenType.TEXT, self.text[self.position:text_end]))
                self._advance_to(text_end)
                continue

            opener = match.group(0)
            closer, token_type, label = self._CLOSERS[opener]
            content_start = self.position + len(opener)
            content_end = self.text.find(closer, content_start)
            if content_end < 0:
                raise LexerError(f"Unclosed {label}", self.line, self.column, self.position)

            tokens.append(self._token(token_type, self.text[content_start:content_end]))
            self._advance_to(content_end + len(closer))

        tokens.append(self._token(TokenType.EOF, ""))
        return tokens

    def tokenize_directive_content(self, directive: Token) -> List[Token]:
        """
        Tokenizes the content of a directive {% ... %}.

        Positions of the produced tokens point into the template source.
        """
        content = directive.value
        # Content starts right after "{%"
        base = directive.position + 2
        tokens: List[Token] = []
        pos = 0

        while pos < len(content):
            ws = self._WHITESPACE.match(content, pos)
            if ws:
                pos = ws.end()
                continue

            line, column = self._line_col(base + pos)

            string = self._STRING.match(content, pos)
            if string:
                raw = string.group(0)[1:-1]
                tokens.append(Token(TokenType.STRING, self._ESCAPE.sub(r'\1', raw), base + pos, line, column))
                pos = string.end()
                continue

            equals = self._EQUALS.match(content, pos)
            if equals:
                tokens.append(Token(TokenType.EQUALS, "=", base + pos, line, column))
                pos = equals.end()
                continue

            ident = self._IDENTIFIER.match(content, pos)
            if ident:
                tokens.append(Token(TokenType.IDENTIFIER, ident.group(0), base + pos, line, column))
                pos = ident.end()
                continue

            raise LexerError(
                f"Unexpected character in directive: {content[pos]!r}",
                line, column, base + pos,
            )

        return tokens

    # --------------------------- helpers --------------------------- #

    def _token(self, token_type: TokenType, value: str) -> Token:
        return Token(token_type, value, self.position, self.line, self.column)

    def _advance_to(self, position: int) -> None:
        """Moves to ``position``, updating line and column numbers."""
        chunk = self.text[self.position:position]
        newlines = chunk.count('\n')
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind('\n')
        else:
            self.column += len(chunk)
        self.position = position

    def _line_col(self, position: int) -> tuple[int, int]:
        line = self.text.count('\n', 0, position) + 1
        column = position - (self.text.rfind('\n', 0, position) + 1) + 1
        return line, column


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Raises:
        LexerError: On a lexical error
    """
    return TemplateLexer(text).tokenize()


__all__ = [
    "TokenType",
    "Token",
    "TemplateSyntaxError",
    "LexerError",
    "TemplateLexer",
    "tokenize_template",
]

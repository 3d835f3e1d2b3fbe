"""
Markup view templates: ``${var}`` placeholders, ``{% ... %}`` directives
and ``{# ... #}`` comments.
"""

from __future__ import annotations

from .lexer import LexerError, TemplateLexer, TemplateSyntaxError, Token, TokenType, tokenize_template
from .parser import ParserError, TemplateParser, parse_template
from .renderer import MARKUP_SUFFIX, MarkupTemplateRenderer, TemplateEvaluator

__all__ = [
    "LexerError",
    "MARKUP_SUFFIX",
    "MarkupTemplateRenderer",
    "ParserError",
    "TemplateEvaluator",
    "TemplateLexer",
    "TemplateParser",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "parse_template",
    "tokenize_template",
]

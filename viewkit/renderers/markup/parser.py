"""
Template parser.

Turns the token sequence of a markup template into an AST.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .lexer import TemplateLexer, TemplateSyntaxError, Token, TokenType
from .nodes import (
    CloseSectionNode, CommitNode, ConditionalBlockNode, ExtendsNode, IncludeNode,
    LiteralValue, OpenSectionNode, SuperNode, TemplateAST, TemplateNode, TextNode,
    ValueNode, VariableNode, VariableValue,
)

_VARIABLE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*$')


class ParserError(TemplateSyntaxError):
    """Syntax analysis error."""

    def __init__(self, message: str, token: Token):
        super().__init__(message, token.line, token.column, token.position)
        self.token = token


# (directive token, its content tokens)
_Directive = Tuple[Token, List[Token]]


class TemplateParser:
    """
    Recursive parser for markup templates.

    Conditional blocks are parsed recursively; everything else maps to a
    single node.
    """

    def __init__(self, lexer: TemplateLexer, tokens: List[Token]):
        self.lexer = lexer
        self.tokens = tokens
        self.position = 0

    def parse(self) -> TemplateAST:
        """
        Parses the whole token sequence.

        Raises:
            ParserError: On a syntax error
        """
        nodes, _ = self._parse_nodes(stop=())
        return nodes

    def _parse_nodes(self, stop: Sequence[str]) -> Tuple[List[TemplateNode], Optional[_Directive]]:
        """
        Parses nodes until EOF or until a directive whose keyword is in ``stop``.

        Returns:
            The nodes and the terminating directive (None at EOF)
        """
        nodes: List[TemplateNode] = []

        while not self._is_at_end():
            token = self._advance()

            if token.type == TokenType.TEXT:
                nodes.append(TextNode(text=token.value))
            elif token.type == TokenType.COMMENT:
                continue
            elif token.type == TokenType.PLACEHOLDER:
                nodes.append(VariableNode(path=self._variable_path(token.value.strip(), token)))
            elif token.type == TokenType.DIRECTIVE:
                words = self.lexer.tokenize_directive_content(token)
                if not words:
                    raise ParserError("Empty directive", token)
                if words[0].type == TokenType.IDENTIFIER and words[0].value in stop:
                    return nodes, (token, words)
                nodes.append(self._parse_directive(token, words))
            else:
                raise ParserError(f"Unexpected token: {token.type.name}", token)

        return nodes, None

    def _parse_block(self, stop: Sequence[str]) -> Tuple[List[TemplateNode], _Directive]:
        """Like _parse_nodes, but reaching EOF before a ``stop`` directive is an error."""
        nodes, end = self._parse_nodes(stop)
        if end is None:
            raise ParserError(f"Unclosed block, expected {' or '.join(stop)}", self._current_token())
        return nodes, end

    def _parse_directive(self, token: Token, words: List[Token]) -> TemplateNode:
        keyword = words[0]
        args = words[1:]
        if keyword.type != TokenType.IDENTIFIER:
            raise ParserError("Directive must start with a keyword", keyword)

        name = keyword.value
        if name == "extends":
            return ExtendsNode(path=self._single_name(name, args, token))
        if name == "section":
            return OpenSectionNode(name=self._single_name(name, args, token))
        if name == "endsection":
            self._no_args(name, args, token)
            return CloseSectionNode()
        if name == "super":
            self._no_args(name, args, token)
            return SuperNode()
        if name == "commit":
            if not args:
                return CommitNode()
            return CommitNode(name=self._single_name(name, args, token))
        if name == "include":
            return self._parse_include(token, args)
        if name == "if":
            return self._parse_if(token, args)
        if name in ("else", "endif"):
            raise ParserError(f"'{name}' without a matching 'if'", keyword)

        raise ParserError(f"Unknown directive '{name}'", keyword)

    def _parse_include(self, token: Token, args: List[Token]) -> IncludeNode:
        if not args or args[0].type == TokenType.EQUALS:
            raise ParserError("'include' expects a view path", token)
        path = args[0].value
        rest = args[1:]

        merge = True
        if rest and rest[-1].type == TokenType.IDENTIFIER and rest[-1].value == "only":
            merge = False
            rest = rest[:-1]

        if not rest:
            # "only" alone: explicit empty data, not merged
            return IncludeNode(path=path, data=None if merge else (), merge=merge)

        if rest[0].type != TokenType.IDENTIFIER or rest[0].value != "with":
            raise ParserError("Expected 'with' or 'only' after the include path", rest[0])

        pairs: List[Tuple[str, ValueNode]] = []
        items = rest[1:]
        if not items:
            raise ParserError("'with' expects KEY=VALUE pairs", rest[0])
        if len(items) % 3 != 0:
            raise ParserError("Malformed KEY=VALUE pairs in 'include'", items[-1])

        for i in range(0, len(items), 3):
            key, eq, value = items[i:i + 3]
            if key.type != TokenType.IDENTIFIER or eq.type != TokenType.EQUALS:
                raise ParserError("Expected KEY=VALUE", key)
            if value.type == TokenType.STRING:
                pairs.append((key.value, LiteralValue(value.value)))
            elif value.type == TokenType.IDENTIFIER:
                pairs.append((key.value, VariableValue(self._variable_path(value.value, value))))
            else:
                raise ParserError("Expected a string or a variable", value)

        return IncludeNode(path=path, data=tuple(pairs), merge=merge)

    def _parse_if(self, token: Token, args: List[Token]) -> ConditionalBlockNode:
        negated = False
        if args and args[0].type == TokenType.IDENTIFIER and args[0].value == "not":
            negated = True
            args = args[1:]
        if len(args) != 1 or args[0].type != TokenType.IDENTIFIER:
            raise ParserError("'if' expects a single variable, optionally preceded by 'not'", token)
        path = self._variable_path(args[0].value, args[0])

        body, (end_token, end_words) = self._parse_block(("else", "endif"))
        else_body: List[TemplateNode] = []

        if end_words[0].value == "else":
            self._no_args("else", end_words[1:], end_token)
            else_body, (end_token, end_words) = self._parse_block(("endif",))

        self._no_args("endif", end_words[1:], end_token)
        return ConditionalBlockNode(path=path, body=body, negated=negated, else_body=else_body)

    # --------------------------- helpers --------------------------- #

    @staticmethod
    def _single_name(directive: str, args: List[Token], token: Token) -> str:
        if len(args) != 1 or args[0].type == TokenType.EQUALS:
            raise ParserError(f"'{directive}' expects exactly one name", token)
        return args[0].value

    @staticmethod
    def _no_args(directive: str, args: List[Token], token: Token) -> None:
        if args:
            raise ParserError(f"'{directive}' takes no arguments", token)

    @staticmethod
    def _variable_path(text: str, token: Token) -> Tuple[str, ...]:
        if not _VARIABLE.match(text):
            raise ParserError(f"Invalid variable reference {text!r}", token)
        return tuple(text.split("."))

    def _current_token(self) -> Token:
        return self.tokens[self.position]

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _is_at_end(self) -> bool:
        return self.tokens[self.position].type == TokenType.EOF


def parse_template(text: str) -> TemplateAST:
    """
    Convenience function: source text -> AST.

    Raises:
        TemplateSyntaxError: On a lexical or syntax error
    """
    lexer = TemplateLexer(text)
    return TemplateParser(lexer, lexer.tokenize()).parse()


__all__ = ["ParserError", "TemplateParser", "parse_template"]

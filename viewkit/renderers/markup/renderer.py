"""
Renderer for markup view templates (``<root>/<path>.tpl``).

Parses the template into an AST (memoized per file fingerprint) and
evaluates it against the data context, translating directives into
calls on the composer handle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Tuple

from .lexer import TemplateSyntaxError
from .nodes import (
    CloseSectionNode, CommitNode, ConditionalBlockNode, ExtendsNode, IncludeNode,
    LiteralValue, OpenSectionNode, SuperNode, TemplateAST, TemplateNode, TextNode,
    ValueNode, VariableNode,
)
from .parser import parse_template
from ...errors import ViewNotFoundError
from ...types import DataContext, ViewId

if TYPE_CHECKING:
    from ...composer import ViewComposer

logger = logging.getLogger(__name__)

MARKUP_SUFFIX = ".tpl"


class _Undefined:
    def __repr__(self) -> str:
        return "<undefined>"


UNDEFINED = _Undefined()


def lookup(data: Any, path: Sequence[str]) -> Any:
    """Dotted lookup: mapping keys first, then attributes. UNDEFINED if missing."""
    current = data
    for part in path:
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        elif not isinstance(current, Mapping) and hasattr(current, part):
            current = getattr(current, part)
        else:
            return UNDEFINED
    return current


class TemplateEvaluator:
    """Evaluates one template AST against a data context."""

    def __init__(self, view: ViewId, data: DataContext, composer: ViewComposer):
        self.view = view
        self.data = data
        self.composer = composer

    def evaluate(self, ast: TemplateAST) -> None:
        for node in ast:
            self._evaluate_node(node)

    def _evaluate_node(self, node: TemplateNode) -> None:
        composer = self.composer

        if isinstance(node, TextNode):
            composer.write(node.text)
        elif isinstance(node, VariableNode):
            composer.write(self._stringify(node.path))
        elif isinstance(node, OpenSectionNode):
            composer.open(node.name)
        elif isinstance(node, CloseSectionNode):
            composer.close()
        elif isinstance(node, SuperNode):
            composer.flush_and_mark_parent()
        elif isinstance(node, CommitNode):
            composer.write(composer.commit(node.name))
        elif isinstance(node, ExtendsNode):
            composer.extend(node.path)
        elif isinstance(node, IncludeNode):
            composer.write(composer.include(node.path, self._include_data(node), node.merge))
        elif isinstance(node, ConditionalBlockNode):
            value = lookup(self.data, node.path)
            truthy = value is not UNDEFINED and bool(value)
            self.evaluate(node.body if truthy != node.negated else node.else_body)
        else:
            raise TypeError(f"No evaluator for node type: {type(node).__name__}")

    def _stringify(self, path: Tuple[str, ...]) -> str:
        value = lookup(self.data, path)
        if value is UNDEFINED:
            logger.debug("Undefined variable '%s' in view '%s'", ".".join(path), self.view)
            return ""
        if value is None:
            return ""
        return str(value)

    def _include_data(self, node: IncludeNode) -> Optional[Dict[str, Any]]:
        if node.data is None:
            return None
        return {key: self._value(value) for key, value in node.data}

    def _value(self, value: ValueNode) -> Any:
        if isinstance(value, LiteralValue):
            return value.text
        resolved = lookup(self.data, value.path)
        return None if resolved is UNDEFINED else resolved


class MarkupTemplateRenderer:
    """Finds ``<root>/<path><suffix>`` files and interprets them."""

    def __init__(self, suffix: str = MARKUP_SUFFIX, encoding: str = "utf-8"):
        self.suffix = suffix
        self.encoding = encoding
        # filename -> (mtime_ns, size, ast)
        self._ast_cache: Dict[Path, Tuple[int, int, TemplateAST]] = {}

    def exists(self, view: ViewId) -> bool:
        return view.filename(self.suffix).is_file()

    def render(self, view: ViewId, data: DataContext, composer: ViewComposer) -> None:
        ast = self.load(view)
        TemplateEvaluator(view, data, composer).evaluate(ast)

    def load(self, view: ViewId) -> TemplateAST:
        """Parsed template of a view (cached until the file changes)."""
        filename = view.filename(self.suffix)
        if not filename.is_file():
            raise ViewNotFoundError(view.path, str(filename))

        st = filename.stat()
        mtime_ns, size = int(st.st_mtime_ns), int(st.st_size)
        cached = self._ast_cache.get(filename)
        if cached is not None and cached[0] == mtime_ns and cached[1] == size:
            return cached[2]

        try:
            ast = parse_template(filename.read_text(encoding=self.encoding))
        except TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                f"{e.message} in view '{view}'", e.line, e.column, e.position
            ) from e
        self._ast_cache[filename] = (mtime_ns, size, ast)
        logger.debug("Parsed view '%s' -> %d nodes", view, len(ast))
        return ast


__all__ = ["MarkupTemplateRenderer", "TemplateEvaluator", "MARKUP_SUFFIX", "lookup", "UNDEFINED"]

"""
AST nodes for markup view templates.

Section directives stay flat (open/close/super/commit events) so that
the composer, not the parser, enforces section discipline. Only
conditional blocks nest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Static text, written as is."""
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Placeholder ${a.b.c}."""
    path: Tuple[str, ...]


@dataclass(frozen=True)
class ExtendsNode(TemplateNode):
    """{% extends PATH %}"""
    path: str


@dataclass(frozen=True)
class OpenSectionNode(TemplateNode):
    """{% section NAME %}"""
    name: str


@dataclass(frozen=True)
class CloseSectionNode(TemplateNode):
    """{% endsection %}"""
    pass


@dataclass(frozen=True)
class SuperNode(TemplateNode):
    """{% super %}"""
    pass


@dataclass(frozen=True)
class CommitNode(TemplateNode):
    """{% commit [NAME] %}; without a name closes the open section."""
    name: Optional[str] = None


@dataclass(frozen=True)
class LiteralValue:
    text: str


@dataclass(frozen=True)
class VariableValue:
    path: Tuple[str, ...]


ValueNode = Union[LiteralValue, VariableValue]


@dataclass(frozen=True)
class IncludeNode(TemplateNode):
    """
    {% include PATH [with KEY=VALUE ...] [only] %}

    ``data`` is None when neither ``with`` nor ``only`` is given, so the
    current context is passed through.
    """
    path: str
    data: Optional[Tuple[Tuple[str, ValueNode], ...]] = None
    merge: bool = True


@dataclass(frozen=True)
class ConditionalBlockNode(TemplateNode):
    """{% if [not] NAME %} ... [{% else %} ...] {% endif %}"""
    path: Tuple[str, ...]
    body: List[TemplateNode]
    negated: bool = False
    else_body: List[TemplateNode] = field(default_factory=list)


# Alias for a list of nodes
TemplateAST = List[TemplateNode]


__all__ = [
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "ExtendsNode",
    "OpenSectionNode",
    "CloseSectionNode",
    "SuperNode",
    "CommitNode",
    "LiteralValue",
    "VariableValue",
    "ValueNode",
    "IncludeNode",
    "ConditionalBlockNode",
    "TemplateAST",
]

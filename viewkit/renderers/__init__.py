"""
Template renderers.

Every renderer satisfies the TemplateRenderer protocol: it locates the
template behind a view and runs it against a composer handle.
"""

from __future__ import annotations

from typing import Literal

from ..errors import ViewArgumentError
from .base import TemplateRenderer
from .callables import FunctionTemplateRenderer, TemplateFunc
from .markup import MARKUP_SUFFIX, MarkupTemplateRenderer, TemplateSyntaxError
from .python_files import PY_SUFFIX, PythonTemplateRenderer

RendererKind = Literal["markup", "python"]


def create_renderer(kind: str = "markup") -> TemplateRenderer:
    """Renderer for view files of the given kind."""
    if kind == "markup":
        return MarkupTemplateRenderer()
    if kind == "python":
        return PythonTemplateRenderer()
    raise ViewArgumentError(f"Unknown renderer '{kind}'. Expected 'markup' or 'python'")


__all__ = [
    "TemplateRenderer",
    "FunctionTemplateRenderer",
    "TemplateFunc",
    "MarkupTemplateRenderer",
    "TemplateSyntaxError",
    "PythonTemplateRenderer",
    "RendererKind",
    "MARKUP_SUFFIX",
    "PY_SUFFIX",
    "create_renderer",
]

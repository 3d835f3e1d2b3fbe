"""
viewkit: server-side view rendering with layout inheritance,
sections, includes and a TTL cache.
"""

from __future__ import annotations

from typing import Optional

from .cache import CachedView, CacheEntry, CacheStore, FileCacheStore, MemoryCacheStore
from .cache.view import DEFAULT_TTL, Clock
from .composer import ViewComposer, normalize_whitespace
from .errors import (
    CyclicInheritanceError,
    InvalidStateError,
    TemplateLoadError,
    ViewNotFoundError,
    ViewsUserError,
)
from .factory import ViewFactory
from .inheritance import InheritanceResolver
from .renderers import (
    FunctionTemplateRenderer,
    MarkupTemplateRenderer,
    PythonTemplateRenderer,
    TemplateRenderer,
    TemplateSyntaxError,
    create_renderer,
)
from .section import PARENT, SectionMarker, SectionStore
from .types import DataContext, PathLike, ViewId, normalize_view_path


def render_view(
    root_dir: PathLike,
    path: str,
    data: Optional[DataContext] = None,
    *,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render one view without caching."""
    return ViewFactory(root_dir, renderer=renderer).composer(path).render(data)


def render_cached_view(
    root_dir: PathLike,
    cache_dir: PathLike,
    path: str,
    data: Optional[DataContext] = None,
    ttl: float = DEFAULT_TTL,
    cache_key: Optional[str] = None,
    *,
    renderer: Optional[TemplateRenderer] = None,
    clock: Optional[Clock] = None,
) -> str:
    """Render one view through a file cache in ``cache_dir``."""
    factory = ViewFactory(root_dir, cache_dir, renderer, clock=clock)
    return factory.get_view(path).enable_cache(ttl, cache_key).render(data)


__all__ = [
    "render_view",
    "render_cached_view",
    "ViewFactory",
    "ViewComposer",
    "CachedView",
    "InheritanceResolver",
    "SectionStore",
    "SectionMarker",
    "PARENT",
    "CacheStore",
    "CacheEntry",
    "FileCacheStore",
    "MemoryCacheStore",
    "TemplateRenderer",
    "FunctionTemplateRenderer",
    "MarkupTemplateRenderer",
    "PythonTemplateRenderer",
    "create_renderer",
    "ViewId",
    "DataContext",
    "normalize_view_path",
    "normalize_whitespace",
    "DEFAULT_TTL",
    "ViewsUserError",
    "ViewNotFoundError",
    "InvalidStateError",
    "CyclicInheritanceError",
    "TemplateLoadError",
    "TemplateSyntaxError",
]

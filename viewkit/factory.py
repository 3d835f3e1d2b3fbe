from __future__ import annotations

from pathlib import Path
from typing import Optional

from .cache import CachedView, CacheStore, FileCacheStore
from .cache.view import Clock
from .composer import ViewComposer
from .renderers import MarkupTemplateRenderer, TemplateRenderer
from .types import PathLike, ViewId


class ViewFactory:
    """
    Entry point for applications: one views directory, one renderer and
    an optional cache directory shared by every view it hands out.
    """

    def __init__(
        self,
        views_dir: PathLike,
        cache_dir: Optional[PathLike] = None,
        renderer: Optional[TemplateRenderer] = None,
        *,
        store: Optional[CacheStore] = None,
        clock: Optional[Clock] = None,
    ):
        self.views_dir = Path(views_dir)
        self.renderer = renderer or MarkupTemplateRenderer()
        if store is None and cache_dir is not None:
            store = FileCacheStore(cache_dir)
        self.store = store
        self._clock = clock

    def view_id(self, path: str) -> ViewId:
        return ViewId(self.views_dir, path)

    def get_view(self, path: str) -> CachedView:
        """A view at ``path`` (caching disabled until ``enable_cache``)."""
        return CachedView(self.view_id(path), self.renderer, self.store, clock=self._clock)

    def composer(self, path: str) -> ViewComposer:
        return ViewComposer(self.view_id(path), self.renderer)

    def exists(self, path: str) -> bool:
        return self.renderer.exists(self.view_id(path))


__all__ = ["ViewFactory"]

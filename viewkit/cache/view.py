"""
Cached view: a composer wrapped with a TTL lookup in a CacheStore.

Disabled by default. Once enabled, the rendered document is stored under
the view path (or a custom key) and served verbatim until it expires,
whatever data later renders pass in.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .store import CacheStore
from ..composer import ViewComposer
from ..errors import ViewArgumentError
from ..renderers.base import TemplateRenderer
from ..types import DataContext, ViewId

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheSettings:
    ttl: float = DEFAULT_TTL
    key: Optional[str] = None


class CachedView:
    """
    A view that can be served from a cache store.

    ``enable_cache`` never touches storage; the store is only consulted
    when ``render`` runs with caching enabled.
    """

    def __init__(
        self,
        view: ViewId,
        renderer: TemplateRenderer,
        store: Optional[CacheStore] = None,
        *,
        clock: Optional[Clock] = None,
    ):
        self.view = view
        self.renderer = renderer
        self.store = store
        self._clock: Clock = clock or time.time
        self._settings: Optional[CacheSettings] = None

    @property
    def cache_enabled(self) -> bool:
        return self._settings is not None

    @property
    def cache_key(self) -> str:
        """Key the rendered document is stored under."""
        if self._settings is not None and self._settings.key:
            return self._settings.key
        return self.view.path

    def enable_cache(self, ttl: float = DEFAULT_TTL, key: Optional[str] = None) -> CachedView:
        """Switch caching on; returns self so calls chain: ``view.enable_cache().render(d)``."""
        if self.store is None:
            raise ValueError(f"View '{self.view}' has no cache store configured")
        if ttl < 0:
            raise ViewArgumentError(f"Cache TTL must be non-negative, got {ttl}")
        self._settings = CacheSettings(ttl=ttl, key=key)
        return self

    def disable_cache(self) -> CachedView:
        self._settings = None
        return self

    def render(self, data: Optional[DataContext] = None) -> str:
        """
        Rendered document, from the cache while an entry is valid.

        Storage errors propagate. Nothing is stored when composition fails.
        """
        settings = self._settings
        if settings is None or self.store is None:
            return self._compose(data)

        key = self.cache_key
        now = self._clock()
        entry = self.store.get(key)
        if entry is not None and entry.is_valid(now):
            logger.debug("Cache hit for view '%s' (key '%s')", self.view, key)
            return entry.content

        logger.debug(
            "Cache %s for view '%s' (key '%s')",
            "miss" if entry is None else "expired", self.view, key,
        )
        content = self._compose(data)
        self.store.put(key, content, now + settings.ttl)
        logger.debug("Stored view '%s' under '%s' for %ss", self.view, key, settings.ttl)
        return content

    def _compose(self, data: Optional[DataContext]) -> str:
        return ViewComposer(self.view, self.renderer).render(data)


__all__ = ["CachedView", "CacheSettings", "DEFAULT_TTL", "Clock"]

"""
Renderer for views written as Python modules.

``<root>/<path>.py`` must define ``render(data, view)``; the function
writes output through ``view.write()`` and uses the composer's section
operations directly:

    def render(data, view):
        view.extend("layouts/base")
        with view.section("title"):
            view.write(f"<h1>{data.get('title', 'Untitled')}</h1>")
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Callable, Dict, Tuple

from ..errors import TemplateLoadError, ViewNotFoundError
from ..types import DataContext, ViewId

if TYPE_CHECKING:
    from ..composer import ViewComposer

logger = logging.getLogger(__name__)

PY_SUFFIX = ".py"


def _fingerprint(path: Path) -> Tuple[int, int]:
    st = path.stat()
    return int(st.st_mtime_ns), int(st.st_size)


class PythonTemplateRenderer:
    """Loads ``render`` functions from Python files under the views root."""

    def __init__(self, suffix: str = PY_SUFFIX):
        self.suffix = suffix
        # filename -> (fingerprint, render function)
        self._loaded: Dict[Path, Tuple[Tuple[int, int], Callable]] = {}

    def exists(self, view: ViewId) -> bool:
        return view.filename(self.suffix).is_file()

    def render(self, view: ViewId, data: DataContext, composer: ViewComposer) -> None:
        func = self._load(view)
        func(data, composer)

    def _load(self, view: ViewId) -> Callable:
        filename = view.filename(self.suffix)
        if not filename.is_file():
            raise ViewNotFoundError(view.path, str(filename))

        fp = _fingerprint(filename)
        cached = self._loaded.get(filename)
        if cached is not None and cached[0] == fp:
            return cached[1]

        module = self._import(filename)
        func = getattr(module, "render", None)
        if not callable(func):
            raise TemplateLoadError(f"View module {filename} does not define a callable 'render(data, view)'")

        self._loaded[filename] = (fp, func)
        logger.debug("Loaded python view '%s' from %s", view, filename)
        return func

    @staticmethod
    def _import(filename: Path) -> ModuleType:
        digest = hashlib.sha1(str(filename.resolve()).encode("utf-8")).hexdigest()[:12]
        spec = importlib.util.spec_from_file_location(f"_viewkit_view_{digest}", filename)
        if spec is None or spec.loader is None:
            raise TemplateLoadError(f"Cannot load view module {filename}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module


__all__ = ["PythonTemplateRenderer", "PY_SUFFIX"]

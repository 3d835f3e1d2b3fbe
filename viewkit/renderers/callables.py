from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Mapping, Optional

from ..errors import ViewNotFoundError
from ..types import DataContext, ViewId, normalize_view_path

if TYPE_CHECKING:
    from ..composer import ViewComposer

TemplateFunc = Callable[[DataContext, "ViewComposer"], None]


class FunctionTemplateRenderer:
    """
    In-memory renderer: view path -> ``func(data, view)``.

    Keys are normalized like view paths, so "/a/b/" and "a/b" register
    the same template. The views root is ignored.
    """

    def __init__(self, templates: Optional[Mapping[str, TemplateFunc]] = None):
        self._templates: Dict[str, TemplateFunc] = {}
        for path, func in (templates or {}).items():
            self.register(path, func)

    def register(self, path: str, func: TemplateFunc) -> None:
        self._templates[normalize_view_path(path)] = func

    def exists(self, view: ViewId) -> bool:
        return view.path in self._templates

    def render(self, view: ViewId, data: DataContext, composer: ViewComposer) -> None:
        func = self._templates.get(view.path)
        if func is None:
            raise ViewNotFoundError(view.path)
        func(data, composer)


__all__ = ["FunctionTemplateRenderer", "TemplateFunc"]

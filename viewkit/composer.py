"""
Per-view composer.

A ViewComposer drives one render call of one view: it runs the template
through a renderer, routes literal output either into the document body
or into the open section, and hands the captured sections to the
inheritance resolver when the view extends a layout.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from .errors import InvalidStateError
from .inheritance import InheritanceResolver
from .renderers.base import TemplateRenderer
from .section import SectionPart, SectionStore
from .types import DataContext, ViewId

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\n+\s*")


def normalize_whitespace(content: str) -> str:
    """Collapse blank lines and indentation; strip the document."""
    return _LINE_BREAKS.sub("\n", content.strip())


class ViewComposer:
    """
    Composer for a single view.

    The object passed to templates as their handle. Besides ``write()``
    it exposes the section-control operations (``open``, ``close``,
    ``flush_and_mark_parent``, ``commit``), ``extend`` and ``include``.
    """

    def __init__(
        self,
        view: ViewId,
        renderer: TemplateRenderer,
        *,
        overrides: Optional[Mapping[str, Sequence[SectionPart]]] = None,
        resolver: Optional[InheritanceResolver] = None,
    ):
        """
        Args:
            view: View to render
            renderer: Executes the view's template
            overrides: Sections resolved by a child view (set by the resolver only)
            resolver: Resolver shared along one extends chain
        """
        self.view = view
        self.renderer = renderer
        self._overrides = dict(overrides or {})
        self._resolver = resolver
        self._start({})

    def _start(self, data: DataContext) -> None:
        self._data: DataContext = MappingProxyType(dict(data))
        self._body: List[str] = []
        self._sections = SectionStore(self._overrides)
        self._parent: Optional[str] = None

    @property
    def data(self) -> DataContext:
        """Data context of the current render call (read-only)."""
        return self._data

    @property
    def parent(self) -> Optional[str]:
        """Path of the declared parent view, if any."""
        return self._parent

    # --------------------------- rendering --------------------------- #

    def render(self, data: Optional[DataContext] = None) -> str:
        """
        Render the view with the given data and return the final document.

        Raises:
            ViewNotFoundError: If no template backs this view (or an ancestor)
            InvalidStateError: On misuse of the section operations
            CyclicInheritanceError: If the extends chain loops
        """
        self._start(data or {})
        logger.debug("Rendering view '%s'", self.view)

        self.renderer.render(self.view, self._data, self)

        if self._sections.is_open:
            raise InvalidStateError(
                f"Section '{self._sections.open_name}' of view '{self.view}' was never closed"
            )

        content = "".join(self._body)

        if self._parent is not None:
            resolver = self._resolver or InheritanceResolver(self.renderer)
            content = resolver.compose(
                self.view,
                self.view.sibling(self._parent),
                self._sections,
                self._data,
                content,
            )

        return normalize_whitespace(content)

    # --------------------------- template handle --------------------------- #

    def write(self, text: Any) -> None:
        """Emit literal output at the current position."""
        if not isinstance(text, str):
            text = str(text)
        if self._sections.is_open:
            self._sections.capture(text)
        else:
            self._body.append(text)

    def open(self, name: str) -> None:
        """Open a section; following output is captured for it."""
        self._sections.open(name)

    def close(self) -> str:
        """Close the open section and return its name."""
        return self._sections.close()

    def flush_and_mark_parent(self) -> None:
        """Insert the parent's original content of the open section at this point."""
        self._sections.flush_and_mark_parent()

    def commit(self, name: Optional[str] = None) -> str:
        """
        Resolved content of a section.

        Without a name, closes the open section first and returns its content.
        """
        if name is None:
            name = self._sections.close()
        return self._sections.commit(name)

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """``with view.section("body"): ...`` for callable templates."""
        self.open(name)
        yield
        self.close()

    def extend(self, path: str) -> None:
        """Declare the parent view (the last call wins)."""
        self._parent = path

    def include(
        self,
        path: str,
        data: Optional[DataContext] = None,
        merge_data: bool = True,
    ) -> str:
        """
        Render another view and return its output wrapped in line breaks.

        Args:
            path: View to include
            data: Explicit data; None passes the current context through
            merge_data: Overlay ``data`` on the current context instead of replacing it
        """
        if data is not None and merge_data:
            data = {**self._data, **data}
        context = self._data if data is None else data

        included = ViewComposer(self.view.sibling(path), self.renderer)
        return f"\n{included.render(context)}\n"


__all__ = ["ViewComposer", "normalize_whitespace"]

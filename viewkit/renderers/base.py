"""
Protocol between the composer and the code that executes templates.

A renderer knows how to find the template behind a view and how to run
it. Running a template means calling back into the composer handle:
``write()`` for literal output and the section-control operations for
everything else. The renderer never deals with inheritance itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..types import DataContext, ViewId

if TYPE_CHECKING:
    from ..composer import ViewComposer


@runtime_checkable
class TemplateRenderer(Protocol):

    def exists(self, view: ViewId) -> bool:
        """
        Checks whether a template backs the view.

        Args:
            view: View identity

        Returns:
            True if the view can be rendered
        """
        ...

    def render(self, view: ViewId, data: DataContext, composer: ViewComposer) -> None:
        """
        Executes the template of a view.

        Args:
            view: View identity
            data: Read-only data context for this render
            composer: Handle receiving output and section events

        Raises:
            ViewNotFoundError: If no template backs the view
        """
        ...


__all__ = ["TemplateRenderer"]

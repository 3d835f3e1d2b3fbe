"""
Inheritance resolver for view layouts.

Walks the extends chain of a view:
- resolves the child's sections into overrides for its parent
- renders the parent with those overrides and the same data
- prepends the parent's document to the child's own body
- detects cycles via a resolution stack shared along the chain
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List

from .errors import CyclicInheritanceError
from .section import SectionParts, SectionStore
from .types import DataContext, ViewId

if TYPE_CHECKING:
    from .renderers.base import TemplateRenderer

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """
    Resolver for one extends chain.

    A single instance is shared by every composer of the chain, so the
    resolution stack always holds the views currently waiting for their
    parent to render.
    """

    def __init__(self, renderer: TemplateRenderer):
        """
        Args:
            renderer: Renderer used for every ancestor in the chain
        """
        self._renderer = renderer
        self._resolution_stack: List[str] = []

    def compose(
        self,
        child: ViewId,
        parent: ViewId,
        sections: SectionStore,
        data: DataContext,
        body: str,
    ) -> str:
        """
        Render ``parent`` with the child's sections and join both documents.

        Args:
            child: View that declared the parent
            parent: Declared parent view
            sections: Sections captured by the child (with its own overrides)
            data: Data context of the child's render
            body: Child output emitted outside of any section

        Returns:
            Parent document, a line break, then the child body (not normalized)

        Raises:
            CyclicInheritanceError: If ``parent`` is already being resolved
        """
        active = self._resolution_stack + [child.path]
        if parent.path in active:
            cycle = active[active.index(parent.path):] + [parent.path]
            raise CyclicInheritanceError(cycle=cycle)

        overrides = self.collect_overrides(sections)
        logger.debug(
            "View '%s' extends '%s' (sections: %s)",
            child, parent, ", ".join(overrides) or "-",
        )

        # Local import: the composer module depends on this one
        from .composer import ViewComposer

        self._resolution_stack.append(child.path)
        try:
            composer = ViewComposer(parent, self._renderer, overrides=overrides, resolver=self)
            parent_content = composer.render(data)
        finally:
            self._resolution_stack.pop()

        return f"{parent_content}\n{body}"

    @staticmethod
    def collect_overrides(sections: SectionStore) -> Dict[str, SectionParts]:
        """Every known section resolved at this level, markers kept for the parent."""
        return {name: sections.resolve(name) for name in sections.names()}


__all__ = ["InheritanceResolver"]

"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from ViewsUserError.

Programming errors and bugs should NOT inherit from ViewsUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


class ViewsUserError(Exception):
    """
    Base class for all user-facing errors in viewkit.

    These errors indicate problems that the user can fix:
    missing templates, broken section markup, cyclic layouts, etc.
    """
    pass


class ViewNotFoundError(ViewsUserError):
    """Raised when no template backs a view path."""
    def __init__(self, path: str, searched: str = ""):
        self.path = path
        self.searched = searched
        msg = f'Failed to load view "{path}"'
        if searched:
            msg += f" (searched: {searched})"
        super().__init__(msg)


class InvalidStateError(ViewsUserError):
    """Section-control operation invoked out of order."""
    pass


@dataclass
class CyclicInheritanceError(ViewsUserError):
    """Circular dependency in an extends chain."""
    cycle: List[str]

    def __str__(self) -> str:
        return f"Cyclic view inheritance: {' -> '.join(self.cycle)}"


class TemplateLoadError(ViewsUserError):
    """A template exists but cannot be turned into something renderable."""
    pass


class ViewArgumentError(ViewsUserError, ValueError):
    """Invalid view path, cache key, TTL or data context supplied by the caller."""
    pass


__all__ = [
    "ViewsUserError",
    "ViewNotFoundError",
    "InvalidStateError",
    "CyclicInheritanceError",
    "TemplateLoadError",
    "ViewArgumentError",
]

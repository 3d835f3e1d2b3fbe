from __future__ import annotations

from .parts import PARENT, SectionMarker, SectionPart, SectionParts, join_parts, merge_parts
from .store import SectionStore

__all__ = [
    "PARENT",
    "SectionMarker",
    "SectionPart",
    "SectionParts",
    "SectionStore",
    "join_parts",
    "merge_parts",
]

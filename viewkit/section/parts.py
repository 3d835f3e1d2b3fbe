"""
Section parts and the two-level merge of a child's override with a
parent's own captured content.
"""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence, Union


class SectionMarker(enum.Enum):
    """Non-string parts of a section."""

    # Splice the overridden view's original content here
    PARENT = "parent"

    def __repr__(self) -> str:
        return f"<{self.name}>"


PARENT = SectionMarker.PARENT

# A literal string fragment or a marker
SectionPart = Union[str, SectionMarker]
SectionParts = List[SectionPart]


def merge_parts(own: Optional[Sequence[SectionPart]], override: Optional[Sequence[SectionPart]]) -> SectionParts:
    """
    Merge a descendant's override with this view's own captured parts.

    Every PARENT marker in the override is replaced by the whole ``own``
    sequence, as captured (own markers included). Without an override the
    result is ``own``. When ``own`` is None (section never captured at this
    level) the override is returned as is, so its markers can still expand
    against a further ancestor.
    """
    if override is None:
        return list(own or [])
    if own is None:
        return list(override)

    result: SectionParts = []
    for part in override:
        if part is PARENT:
            result.extend(own)
        else:
            result.append(part)
    return result


def join_parts(parts: Sequence[SectionPart]) -> str:
    """Printable content: literal parts only, markers dropped."""
    return "".join(p for p in parts if isinstance(p, str))


__all__ = ["SectionMarker", "PARENT", "SectionPart", "SectionParts", "merge_parts", "join_parts"]

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from .parts import PARENT, SectionPart, SectionParts, join_parts, merge_parts
from ..errors import InvalidStateError


class SectionStore:
    """
    Sections captured while one view renders.

    Keeps the ordered parts of every named section, the overrides handed
    down by a child view, and the single section currently open together
    with its output buffer.
    """

    def __init__(self, overrides: Optional[Mapping[str, Sequence[SectionPart]]] = None):
        self._sections: Dict[str, SectionParts] = {}
        self._overrides: Dict[str, SectionParts] = {
            name: list(parts) for name, parts in (overrides or {}).items()
        }
        self._open: Optional[str] = None
        self._buffer: List[str] = []

    # --------------------------- capture --------------------------- #

    @property
    def is_open(self) -> bool:
        return self._open is not None

    @property
    def open_name(self) -> Optional[str]:
        return self._open

    def open(self, name: str) -> None:
        """Start buffering output for section ``name``."""
        if self._open is not None:
            raise InvalidStateError(
                f"Cannot open section '{name}': section '{self._open}' is still open"
            )
        self._open = name
        self._buffer = []

    def capture(self, text: str) -> None:
        """Buffer literal output for the open section."""
        if self._open is None:
            raise InvalidStateError("No open section to capture output into")
        self._buffer.append(text)

    def close(self) -> str:
        """Store the buffered output and close the open section. Returns its name."""
        name = self._require_open("close")
        self._flush(name)
        self._open = None
        return name

    def flush_and_mark_parent(self) -> None:
        """Store the buffered output, then a PARENT marker; keep the section open."""
        name = self._require_open("insert the parent content of")
        self._flush(name)
        self._sections[name].append(PARENT)

    # --------------------------- resolution --------------------------- #

    def names(self) -> List[str]:
        """Every section name known here: overridden by a child or captured locally."""
        names = list(self._overrides)
        names.extend(n for n in self._sections if n not in self._overrides)
        return names

    def resolve(self, name: str) -> SectionParts:
        """Parts of ``name`` after applying the child's override, if any."""
        return merge_parts(self._sections.get(name), self._overrides.get(name))

    def commit(self, name: str) -> str:
        """Printable content of ``name``; the section does not have to be open."""
        return join_parts(self.resolve(name))

    # --------------------------- helpers --------------------------- #

    def _require_open(self, action: str) -> str:
        if self._open is None:
            raise InvalidStateError(f"Cannot {action} a section: no section is open")
        return self._open

    def _flush(self, name: str) -> None:
        self._sections.setdefault(name, []).append("".join(self._buffer))
        self._buffer = []


__all__ = ["SectionStore"]

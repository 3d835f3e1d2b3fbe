from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Union

from .errors import ViewArgumentError

# ---- Aliases for clarity ----
DataContext = Mapping[str, Any]
PathLike = Union[str, Path]

_SEPARATORS = "/\\"


def normalize_view_path(path: str) -> str:
    """
    Trim leading/trailing separators so that "a/b", "/a/b", "/a/b/"
    and "a/b/" all name the same view.
    """
    norm = str(path).strip(_SEPARATORS)
    if not norm:
        raise ViewArgumentError(f"Empty view path: {path!r}")
    return norm


# -----------------------------
@dataclass(frozen=True)
class ViewId:
    """
    Identity of one view: views root directory plus a relative path.

    The path is stored normalized (no leading or trailing separators).
    """
    root: Path
    path: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "path", normalize_view_path(self.path))

    def sibling(self, path: str) -> ViewId:
        """Another view under the same root (parents, includes)."""
        return ViewId(self.root, path)

    def filename(self, suffix: str) -> Path:
        """Backing file for this view with the given suffix (e.g. '.tpl')."""
        return self.root / f"{self.path}{suffix}"

    def __str__(self) -> str:
        return self.path


__all__ = ["DataContext", "PathLike", "ViewId", "normalize_view_path"]

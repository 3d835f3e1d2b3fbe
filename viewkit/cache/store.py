from __future__ import annotations

import json
import logging
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ..errors import ViewArgumentError
from ..types import PathLike, normalize_view_path

logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".html"
INFO_SUFFIX = ".cache"
TMP_SUFFIX = ".tmp"

# Temp files written by _atom_write: "<name>.html.<random>.tmp"
_TMP_NAME = re.compile(r".+\.(?:html|cache)\..+\.tmp$")


@dataclass(frozen=True)
class CacheEntry:
    content: str
    expires: float

    def is_valid(self, now: float) -> bool:
        """Valid strictly before ``expires``."""
        return now < self.expires


@dataclass(frozen=True)
class CacheSnapshot:
    path: Optional[Path]
    exists: bool
    entries: int
    size_bytes: int


@runtime_checkable
class CacheStore(Protocol):
    """Durable storage of rendered views."""

    def get(self, key: str) -> Optional[CacheEntry]:
        ...

    def put(self, key: str, content: str, expires: float) -> None:
        ...

    def clear(self) -> None:
        """Remove every cached view."""
        ...

    def snapshot(self) -> CacheSnapshot:
        ...


class MemoryCacheStore:
    """Process-local store, mostly for embedding and tests."""

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, content: str, expires: float) -> None:
        self._entries[key] = CacheEntry(content=content, expires=expires)

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(
            path=None,
            exists=True,
            entries=len(self._entries),
            size_bytes=sum(len(e.content.encode("utf-8")) for e in self._entries.values()),
        )


class FileCacheStore:
    """
    File cache of rendered views:
      • <dir>/<key>.html:  rendered content
      • <dir>/<key>.cache: JSON metadata {"expires": <unix time>}
    Keys containing "/" map to subdirectories.

    The directory may be shared with other files: maintenance only
    touches metadata files, their content files and interrupted writes.
    I/O errors are not masked: a failing cache fails the render.
    """

    def __init__(self, directory: PathLike):
        self.dir = Path(directory)

    # --------------------------- entries --------------------------- #

    def get(self, key: str) -> Optional[CacheEntry]:
        content_path, info_path = self._paths(key)
        if not (content_path.is_file() and info_path.is_file()):
            return None

        try:
            info = json.loads(info_path.read_text(encoding="utf-8"))
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError
            logger.warning("Malformed cache metadata %s, ignoring entry", info_path)
            return None

        expires = info.get("expires") if isinstance(info, dict) else None
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            logger.warning("Cache metadata %s has no valid 'expires', ignoring entry", info_path)
            return None

        return CacheEntry(content=content_path.read_text(encoding="utf-8"), expires=expires)

    def put(self, key: str, content: str, expires: float) -> None:
        content_path, info_path = self._paths(key)
        content_path.parent.mkdir(parents=True, exist_ok=True)
        self._atom_write(content_path, content)
        self._atom_write(info_path, json.dumps({"expires": expires}))

    # --------------------------- maintenance --------------------------- #

    def clear(self) -> None:
        """Remove every cached view; other files in the directory are kept."""
        if not self.dir.is_dir():
            self.dir.mkdir(parents=True, exist_ok=True)
            return

        touched = set()
        for p in self._owned_files():
            p.unlink(missing_ok=True)
            touched.add(p.parent)

        # Deepest first; only directories emptied here, never the cache root
        for d in sorted(touched, key=lambda p: len(p.parts), reverse=True):
            while d != self.dir and d.is_dir() and not any(d.iterdir()):
                d.rmdir()
                d = d.parent

    def snapshot(self) -> CacheSnapshot:
        size = 0
        entries = 0
        for p in self._owned_files():
            size += p.stat().st_size
            if p.suffix == INFO_SUFFIX:
                entries += 1
        return CacheSnapshot(
            path=self.dir,
            exists=self.dir.exists(),
            entries=entries,
            size_bytes=size,
        )

    # --------------------------- IO helpers --------------------------- #

    def _owned_files(self) -> List[Path]:
        """Metadata files, their content files and interrupted writes."""
        if not self.dir.is_dir():
            return []
        owned: List[Path] = []
        for info in self.dir.rglob("*" + INFO_SUFFIX):
            if not info.is_file():
                continue
            owned.append(info)
            content = info.with_suffix(CONTENT_SUFFIX)
            if content.is_file():
                owned.append(content)
        owned.extend(
            p for p in self.dir.rglob("*" + TMP_SUFFIX)
            if p.is_file() and _TMP_NAME.match(p.name)
        )
        return owned

    def _paths(self, key: str) -> tuple[Path, Path]:
        norm = normalize_view_path(key)
        parts = norm.replace("\\", "/").split("/")
        if any(part in ("", ".", "..") for part in parts):
            raise ViewArgumentError(f"Invalid cache key: {key!r}")
        base = self.dir.joinpath(*parts)
        return (
            base.with_name(base.name + CONTENT_SUFFIX),
            base.with_name(base.name + INFO_SUFFIX),
        )

    @staticmethod
    def _atom_write(path: Path, text: str) -> None:
        # One temp file per writer: concurrent puts of a key must not share it
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f"{path.name}.",
            suffix=TMP_SUFFIX,
            delete=False,
        ) as f:
            tmp = Path(f.name)
            f.write(text)
        try:
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise


__all__ = [
    "CacheEntry",
    "CacheSnapshot",
    "CacheStore",
    "MemoryCacheStore",
    "FileCacheStore",
    "CONTENT_SUFFIX",
    "INFO_SUFFIX",
    "TMP_SUFFIX",
]

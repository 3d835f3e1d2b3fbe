from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = "viewkit.yaml"


class ViewsConfig(BaseModel):
    """Contents of viewkit.yaml. Relative paths are resolved against the file's directory."""
    model_config = ConfigDict(extra="forbid")

    views_dir: Path = Path("views")
    cache_dir: Path = Path(".view-cache")
    renderer: Literal["markup", "python"] = "markup"
    default_ttl: float = Field(default=3600, ge=0)

    def resolved(self, base: Path) -> ViewsConfig:
        """Copy with ``views_dir`` and ``cache_dir`` made absolute against ``base``."""
        return self.model_copy(update={
            "views_dir": base / self.views_dir,
            "cache_dir": base / self.cache_dir,
        })


__all__ = ["ViewsConfig", "CONFIG_FILENAME"]

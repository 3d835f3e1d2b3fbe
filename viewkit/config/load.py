from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CONFIG_FILENAME, ViewsConfig
from ..errors import ViewsUserError
from ..types import PathLike

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


class ConfigLoadError(ViewsUserError):
    """Invalid configuration file or value, with the offending field."""
    pass


def _read_yaml_map(path: Path) -> dict:
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path}: YAML must be a mapping")
    return raw


def _describe(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "$"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def load_config(path: Optional[PathLike] = None, *, cwd: Optional[Path] = None) -> ViewsConfig:
    """
    Load viewkit.yaml.

    Args:
        path: Explicit config file; must exist when given
        cwd: Directory searched for viewkit.yaml when ``path`` is None

    Returns:
        Config with absolute ``views_dir``/``cache_dir``. Defaults when
        no file is found.
    """
    if path is not None:
        cfg_path = Path(path)
        if not cfg_path.is_file():
            raise ConfigLoadError(f"Config file not found: {cfg_path}")
    else:
        cfg_path = (cwd or Path.cwd()) / CONFIG_FILENAME
        if not cfg_path.is_file():
            logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, cfg_path.parent)
            return ViewsConfig().resolved(cfg_path.parent)

    raw = _read_yaml_map(cfg_path)
    try:
        cfg = ViewsConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"{cfg_path}: {_describe(e)}") from e

    logger.debug("Loaded config %s: %r", cfg_path, cfg)
    return cfg.resolved(cfg_path.parent)


__all__ = ["ConfigLoadError", "load_config"]

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .cache import CacheSnapshot, FileCacheStore
from .config import ViewsConfig, load_config
from .errors import ViewArgumentError, ViewsUserError
from .factory import ViewFactory
from .renderers import create_renderer
from .version import tool_version

_yaml = YAML(typ="safe")


def _setup_logging_once() -> None:
    if getattr(_setup_logging_once, "_inited", False):
        return
    _setup_logging_once._inited = True  # type: ignore[attr-defined]
    log = logging.getLogger("viewkit")
    log.setLevel(logging.DEBUG if os.environ.get("VIEWKIT_DEBUG") else logging.INFO)
    if not log.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="viewkit",
        description="Render views with layout inheritance and caching",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_config(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--config", metavar="FILE", help="config file (default: ./viewkit.yaml if present)")
        sp.add_argument("--cache-dir", metavar="DIR", help="cache directory (overrides config)")

    sp_render = sub.add_parser("render", help="Render a view to stdout")
    sp_render.add_argument("path", help="view path relative to the views directory, e.g. pages/home")
    add_config(sp_render)
    sp_render.add_argument("--views", metavar="DIR", help="views directory (overrides config)")
    sp_render.add_argument("--renderer", choices=["markup", "python"], help="template kind (overrides config)")
    sp_render.add_argument(
        "--data",
        metavar="JSON|@FILE|-",
        help="data context: inline JSON/YAML, @file to read a file, or - to read stdin",
    )
    sp_render.add_argument("--cache", action="store_true", help="serve from and store into the cache")
    sp_render.add_argument("--ttl", type=float, help="cache time-to-live in seconds (default from config)")
    sp_render.add_argument("--cache-key", metavar="KEY", help="custom cache key instead of the view path")

    sp_cache = sub.add_parser("cache", help="Cache maintenance (JSON)")
    sp_cache.add_argument("action", choices=["info", "clear"], help="what to do")
    add_config(sp_cache)

    return p


def _parse_data(data_arg: Optional[str]) -> Dict[str, Any]:
    """
    Parses the --data argument.

    Supports three formats:
    - Inline JSON or YAML: '{"title": "Hi"}'
    - From a file: @path/to/data.yaml
    - From stdin: -

    Returns:
        The data context (empty when no argument is given)
    """
    if not data_arg:
        return {}

    if data_arg == "-":
        text, source = sys.stdin.read(), "stdin"
    elif data_arg.startswith("@"):
        file_path = Path(data_arg[1:])
        if not file_path.is_file():
            raise ViewArgumentError(f"Data file not found: {file_path}")
        text, source = file_path.read_text(encoding="utf-8"), str(file_path)
    else:
        text, source = data_arg, "--data"

    try:
        data = _yaml.load(text)
    except YAMLError as e:
        raise ViewArgumentError(f"Failed to parse data from {source}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ViewArgumentError(f"Data from {source} must be a mapping, got {type(data).__name__}")
    return data


def _config(ns: argparse.Namespace) -> ViewsConfig:
    cfg = load_config(ns.config)
    update: Dict[str, Any] = {}
    if getattr(ns, "views", None):
        update["views_dir"] = Path(ns.views)
    if getattr(ns, "cache_dir", None):
        update["cache_dir"] = Path(ns.cache_dir)
    if getattr(ns, "renderer", None):
        update["renderer"] = ns.renderer
    return cfg.model_copy(update=update) if update else cfg


def _snapshot_json(snap: CacheSnapshot) -> Dict[str, Any]:
    return {
        "path": str(snap.path) if snap.path is not None else None,
        "exists": snap.exists,
        "entries": snap.entries,
        "sizeBytes": snap.size_bytes,
    }


def _run_render(ns: argparse.Namespace) -> str:
    cfg = _config(ns)
    data = _parse_data(ns.data)
    factory = ViewFactory(cfg.views_dir, cfg.cache_dir, create_renderer(cfg.renderer))
    view = factory.get_view(ns.path)
    if ns.cache:
        ttl = cfg.default_ttl if ns.ttl is None else ns.ttl
        view.enable_cache(ttl, ns.cache_key)
    return view.render(data)


def _run_cache(ns: argparse.Namespace) -> Dict[str, Any]:
    cfg = _config(ns)
    store = FileCacheStore(cfg.cache_dir)
    if ns.action == "clear":
        store.clear()
    return _snapshot_json(store.snapshot())


def main(argv: list[str] | None = None) -> int:
    _setup_logging_once()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "render":
            sys.stdout.write(_run_render(ns))
            return 0

        if ns.cmd == "cache":
            sys.stdout.write(json.dumps(_run_cache(ns), ensure_ascii=False))
            return 0

    except ViewsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

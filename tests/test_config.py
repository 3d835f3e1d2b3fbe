"""
Tests for viewkit.yaml loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from viewkit.config import ConfigLoadError, ViewsConfig, load_config
from viewkit.errors import ViewsUserError

from tests.infrastructure import write


class TestLoadConfig:

    def test_defaults_when_missing(self, tmp_path: Path):
        cfg = load_config(cwd=tmp_path)
        assert cfg.views_dir == tmp_path / "views"
        assert cfg.cache_dir == tmp_path / ".view-cache"
        assert cfg.renderer == "markup"
        assert cfg.default_ttl == 3600

    def test_found_in_cwd(self, tmp_path: Path):
        write(tmp_path / "viewkit.yaml", "views_dir: templates\nrenderer: python\n")
        cfg = load_config(cwd=tmp_path)
        assert cfg.views_dir == tmp_path / "templates"
        assert cfg.renderer == "python"

    def test_paths_relative_to_config_file(self, tmp_path: Path):
        cfg_file = write(tmp_path / "conf" / "site.yaml", "views_dir: ../views\ncache_dir: /var/cache/views\ndefault_ttl: 60\n")
        cfg = load_config(cfg_file)
        assert cfg.views_dir == tmp_path / "conf" / ".." / "views"
        assert cfg.cache_dir == Path("/var/cache/views")
        assert cfg.default_ttl == 60

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        cfg = load_config(write(tmp_path / "viewkit.yaml", ""))
        assert cfg.renderer == "markup"

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "text, field",
        [
            ("renderer: jinja\n", "renderer"),
            ("default_ttl: -5\n", "default_ttl"),
            ("unknown_key: 1\n", "unknown_key"),
        ],
    )
    def test_invalid_values_name_the_field(self, tmp_path: Path, text: str, field: str):
        with pytest.raises(ConfigLoadError, match=field):
            load_config(write(tmp_path / "viewkit.yaml", text))

    def test_invalid_yaml(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            load_config(write(tmp_path / "viewkit.yaml", "views_dir: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(write(tmp_path / "viewkit.yaml", "- a\n- b\n"))

    def test_error_is_user_facing(self):
        assert issubclass(ConfigLoadError, ViewsUserError)


def test_resolved_keeps_absolute_paths(tmp_path: Path):
    cfg = ViewsConfig(views_dir=tmp_path / "abs").resolved(Path("/elsewhere"))
    assert cfg.views_dir == tmp_path / "abs"
    assert cfg.cache_dir == Path("/elsewhere/.view-cache")

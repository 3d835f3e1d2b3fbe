from __future__ import annotations

from pathlib import Path

import pytest

from tests.infrastructure import FakeClock, write_article_views


@pytest.fixture
def views_dir(tmp_path: Path) -> Path:
    """Directory with the shared markup views (see write_article_views)."""
    return write_article_views(tmp_path / "views")


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "view-cache"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(0.0)

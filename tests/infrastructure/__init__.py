"""
Shared test infrastructure for viewkit.

Modules:
- file_utils: creating view files and directories
- views: builders for the common view fixtures
"""

from .file_utils import write
from .views import FakeClock, write_article_views, function_renderer

__all__ = ["write", "FakeClock", "write_article_views", "function_renderer"]

"""
SiteFilters - template filters for static site rendering.

Provides a title-case text filter and the registry that makes it
discoverable by name to a Jinja2 template engine.
"""

__version__ = "0.1.0"

from sitefilters.filters import title_case, TITLE_CASE_FILTER_NAMES
from sitefilters.core.registry import FilterRegistry, register_filters

__all__ = [
    "__version__",
    "title_case",
    "TITLE_CASE_FILTER_NAMES",
    "FilterRegistry",
    "register_filters",
]

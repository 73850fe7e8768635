"""
Template Filters for SiteFilters

Pure text transformations that are registered into a template engine
under stable names and invoked from template expressions at render time.
"""

from .text import title_case, TITLE_CASE_FILTER_NAMES

__all__ = [
    "title_case",
    "TITLE_CASE_FILTER_NAMES",
]

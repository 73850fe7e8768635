"""
SiteFilters command-line interface.
"""

from sitefilters import __version__

__all__ = ["__version__"]

"""
SiteFilters Plugin System

pluggy-based extension point for template filters. Plugins implement the
register_template_filters hook and are discovered from the built-in plugin
module and the sitefilters.plugins entry point group.
"""

from .hooks import FilterHooks, hookimpl, hookspec
from .manager import PluginManager, ENTRY_POINT_GROUP

__all__ = [
    'PluginManager',
    'FilterHooks',
    'hookimpl',
    'hookspec',
    'ENTRY_POINT_GROUP',
]

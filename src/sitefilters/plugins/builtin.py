"""
Built-in filter plugin.

Capitalize each word of the input: registers the title-case filter under
its stable names plus any configured aliases.
"""

from sitefilters.core.plugins.hooks import hookimpl
from sitefilters.core.registry import register_filters

__plugin_info__ = {
    'name': 'builtin',
    'version': '1.0.0',
    'description': 'Title-case filter (TitleCase, Titlecase)',
    'author': 'SiteFilters',
}


@hookimpl
def register_template_filters(registry, aliases):
    return register_filters(registry, aliases=aliases, source=__plugin_info__['name'])

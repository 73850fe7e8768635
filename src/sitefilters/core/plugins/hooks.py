"""
Plugin Hook Specifications

Defines the hook that filter plugins implement to contribute template
filters to a registry.
"""

import pluggy

PROJECT_NAME = "sitefilters"

# Create hook specification and implementation markers
hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FilterHooks:
    """Hook specifications for template filter plugins."""

    @hookspec
    def register_template_filters(self, registry, aliases):
        """Register template filters into a registry.

        Args:
            registry: FilterRegistry to populate
            aliases: Extra names configured for the title-case filter

        Returns:
            Optional list of names the plugin registered
        """

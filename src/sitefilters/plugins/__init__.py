"""
Plugins shipped with SiteFilters.

Each module implements the register_template_filters hook.
"""

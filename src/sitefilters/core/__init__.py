"""
Core SiteFilters Package

Contains the filter registry, plugin system, template engine, configuration,
and error handling.
"""

from sitefilters.core.exceptions import (
    SiteFiltersError,
    ConfigurationError,
    FilterRegistrationError,
    TemplateRenderError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

from sitefilters.core.registry import FilterRegistry, FilterEntry, register_filters

__all__ = [
    'SiteFiltersError',
    'ConfigurationError',
    'FilterRegistrationError',
    'TemplateRenderError',
    'ErrorCode',
    'ErrorContext',
    'RecoverySuggestion',
    'FilterRegistry',
    'FilterEntry',
    'register_filters',
]

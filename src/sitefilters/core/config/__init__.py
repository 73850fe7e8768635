"""
Configuration Management Package

Provides Pydantic-based configuration models and management for SiteFilters.
"""

from sitefilters.core.config.models import AppConfig, FilterConfig, TemplateConfig
from sitefilters.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "FilterConfig",
    "TemplateConfig",
    "ConfigManager",
]

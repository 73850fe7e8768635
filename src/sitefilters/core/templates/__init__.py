"""
Template processing system for SiteFilters.

This module provides the Jinja2 environment that registered filters are
installed into and invoked from at render time.
"""

from .engine import TemplateEngine

__all__ = ['TemplateEngine']

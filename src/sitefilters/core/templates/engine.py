"""
Template Engine

Jinja2 environment wired to a FilterRegistry, so that registered filters
can be invoked from template expressions such as {{ title|TitleCase }}.
"""

import logging
from typing import Any, Dict, List, Optional

import jinja2
from jinja2 import (
    Environment,
    BaseLoader,
    FileSystemLoader,
    TemplateSyntaxError,
    TemplateAssertionError,
)

from sitefilters.core.config.models import TemplateConfig
from sitefilters.core.exceptions import ErrorCode, TemplateRenderError
from sitefilters.core.registry import FilterRegistry


class TemplateEngine:
    """
    Jinja2-based template engine with injected filters.

    Filters are copied from the registry into the environment when the
    engine is created; call install_filters() again after registering more.
    """

    def __init__(self, registry: FilterRegistry, config: Optional[TemplateConfig] = None):
        """
        Initialize the template engine.

        Args:
            registry: Populated filter registry
            config: Template environment settings
        """
        self.logger = logging.getLogger(__name__)
        self.registry = registry
        self.config = config or TemplateConfig()

        if self.config.search_paths:
            loader: BaseLoader = FileSystemLoader([str(p) for p in self.config.search_paths])
        else:
            loader = BaseLoader()

        self.env = Environment(
            loader=loader,
            autoescape=False,  # Text output, no HTML escaping
            trim_blocks=self.config.trim_blocks,
            lstrip_blocks=self.config.lstrip_blocks,
            undefined=jinja2.StrictUndefined if self.config.strict_undefined else jinja2.Undefined,
        )

        self.install_filters()

    def install_filters(self) -> int:
        """Copy registry filters into the Jinja2 filter table."""
        count = self.registry.install(self.env.filters)
        self.logger.debug(f"Installed {count} filters into template environment")
        return count

    def render(self, template: str, variables: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a template string.

        Args:
            template: Jinja2 template source
            variables: Template variables

        Returns:
            Rendered text

        Raises:
            TemplateSyntaxError: If template syntax is invalid or uses an unknown filter
            jinja2.UndefinedError: If a variable is missing and strict_undefined is set
        """
        return self.env.from_string(template).render(**(variables or {}))

    def render_file(self, name: str, variables: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a template found on the configured search paths.

        Raises:
            TemplateRenderError: If no search paths are configured or the template is missing
        """
        if not self.config.search_paths:
            raise TemplateRenderError(
                f"Cannot load template '{name}': no template search paths configured",
                error_code=ErrorCode.TEMPLATE_NOT_FOUND,
                template=name
            )

        try:
            jinja_template = self.env.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateRenderError(
                f"Template not found: {name}",
                error_code=ErrorCode.TEMPLATE_NOT_FOUND,
                template=name,
                cause=e
            ) from e

        return jinja_template.render(**(variables or {}))

    def apply_filter(self, name: str, value: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke one installed filter directly, outside a template.

        Raises:
            TemplateRenderError: If no filter with that name is installed
        """
        func = self.env.filters.get(name)
        if func is None:
            raise TemplateRenderError(
                f"Unknown filter: {name}",
                error_code=ErrorCode.FILTER_NOT_FOUND,
                filter_name=name
            )
        return func(value, *args, **kwargs)

    def list_filters(self) -> List[str]:
        """Names of filters contributed by the registry."""
        return [name for name in self.registry.names() if name in self.env.filters]

    def validate_template(self, template: str) -> List[str]:
        """
        Validate a template string for syntax and unknown filters.

        Args:
            template: Template string to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        try:
            self.env.from_string(template)
        except TemplateAssertionError as e:
            # Raised at compile time for filters missing from the environment
            errors.append(f"Unknown filter: {e}")
        except TemplateSyntaxError as e:
            errors.append(f"Template syntax error: {e}")

        return errors

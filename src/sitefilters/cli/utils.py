"""
CLI Utilities

Shared helpers for CLI commands: logging setup, configuration loading,
template variable parsing, and wiring the registry into a template engine.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console

from sitefilters.core.config import AppConfig, ConfigManager, TemplateConfig
from sitefilters.core.plugins import PluginManager
from sitefilters.core.registry import FilterRegistry
from sitefilters.core.templates import TemplateEngine

console = Console()


@dataclass
class Runtime:
    """Objects built once per CLI invocation."""

    config: AppConfig
    registry: FilterRegistry
    plugins: PluginManager
    engine: TemplateEngine


def setup_logging(level: int = logging.WARNING) -> None:
    """Set up logging configuration for the application."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger("sitefilters").setLevel(level)


def load_config_from_cli(
    config_file: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> AppConfig:
    """
    Load configuration from CLI arguments.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config_manager = ConfigManager(config_file=config_file)
    return config_manager.load_config(cli_args=cli_args or {})


def build_runtime(config: AppConfig, template_config: Optional[TemplateConfig] = None) -> Runtime:
    """
    Create the registry, run plugin registration once, and build the engine.

    Args:
        config: Loaded application configuration
        template_config: Overrides config.templates, e.g. to add a search path

    Returns:
        Runtime with a populated registry and engine
    """
    registry = FilterRegistry()
    plugins = PluginManager(load_entry_points=config.load_entry_points)

    if config.filters.enabled:
        plugins.register_filters(registry, aliases=config.filters.aliases)
    else:
        # Built-in filters disabled: only third-party plugins contribute
        plugins.unregister_plugin("builtin")
        plugins.register_filters(registry)

    engine = TemplateEngine(registry, template_config or config.templates)
    return Runtime(config=config, registry=registry, plugins=plugins, engine=engine)


def parse_vars(values: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse repeated key=value options into template variables.

    Raises:
        typer.BadParameter: If an item has no '=' or an empty key
    """
    variables: Dict[str, str] = {}

    for item in values or []:
        if '=' not in item:
            raise typer.BadParameter(f"Expected key=value, got: {item}", param_hint="--var")
        key, value = item.split('=', 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty variable name in: {item}", param_hint="--var")
        variables[key] = value

    return variables

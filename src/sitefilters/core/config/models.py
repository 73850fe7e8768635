"""
Configuration Models

Pydantic models for type-safe configuration of filter registration,
template rendering and logging.
"""

import logging
from pathlib import Path
from typing import List
from pydantic import BaseModel, Field, field_validator, ConfigDict


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class FilterConfig(BaseModel):
    """Configuration for the built-in template filters."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    enabled: bool = Field(
        default=True,
        description="Register the built-in filters"
    )
    aliases: List[str] = Field(
        default=[],
        description="Extra template names for the title-case filter"
    )

    @field_validator('aliases')
    @classmethod
    def validate_aliases(cls, v: List[str]) -> List[str]:
        """Ensure every alias can be used as a filter name in templates."""
        cleaned = []
        for alias in v:
            alias = alias.strip()
            if not alias.isidentifier():
                raise ValueError(f"Invalid filter alias: {alias!r}")
            if alias not in cleaned:
                cleaned.append(alias)
        return cleaned


class TemplateConfig(BaseModel):
    """Configuration for the Jinja2 template environment."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    strict_undefined: bool = Field(
        default=True,
        description="Raise on undefined template variables instead of rendering them empty"
    )
    trim_blocks: bool = Field(
        default=True,
        description="Remove the first newline after a block tag"
    )
    lstrip_blocks: bool = Field(
        default=True,
        description="Strip leading whitespace before a block tag"
    )
    search_paths: List[Path] = Field(
        default=[],
        description="Directories searched by render_file"
    )


class AppConfig(BaseModel):
    """Root application configuration model."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    filters: FilterConfig = Field(default_factory=FilterConfig, description="Filter configuration")
    templates: TemplateConfig = Field(default_factory=TemplateConfig, description="Template configuration")

    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name"
    )
    load_entry_points: bool = Field(
        default=True,
        description="Load filter plugins from the sitefilters.plugins entry point group"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(LOG_LEVELS)}")
        return level

    def get_log_level(self) -> int:
        """Effective logging level; verbose forces DEBUG."""
        if self.verbose:
            return logging.DEBUG
        return getattr(logging, self.log_level)

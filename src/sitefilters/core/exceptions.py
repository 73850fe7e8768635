"""
Core Exception Hierarchy for SiteFilters

Provides error classification with error codes, recovery suggestions,
and context information for filter registration, configuration and
template rendering failures.
"""

import sys
import time
import traceback
import uuid
from enum import Enum
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


class ErrorCode(Enum):
    """Standard error codes for different error categories."""

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004
    CONFIG_SCHEMA_VALIDATION = 3006

    # Filter and plugin errors (7000-7999)
    FILTER_NOT_FOUND = 7001
    FILTER_ALREADY_REGISTERED = 7002
    FILTER_INVALID = 7003
    PLUGIN_LOAD_FAILED = 7004

    # Template errors (8000-8999)
    TEMPLATE_SYNTAX = 8001
    TEMPLATE_NOT_FOUND = 8002
    TEMPLATE_UNDEFINED = 8003
    TEMPLATE_RENDER_FAILED = 8004

    # Generic/unknown errors (9000-9999)
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Contextual information about an error occurrence."""

    operation: str = ""
    filter_name: Optional[str] = None
    plugin_name: Optional[str] = None
    template: Optional[str] = None
    file_path: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    system_info: Dict[str, Any] = field(default_factory=dict)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            'operation': self.operation,
            'filter_name': self.filter_name,
            'plugin_name': self.plugin_name,
            'template': self.template,
            'file_path': self.file_path,
            'correlation_id': self.correlation_id,
            'timestamp': self.timestamp,
            'system_info': self.system_info,
            'user_context': self.user_context
        }


@dataclass
class RecoverySuggestion:
    """Structured recovery suggestion for error resolution."""

    action: str  # Brief action description
    description: str  # Detailed explanation
    command: Optional[str] = None  # CLI command to resolve
    priority: int = 1  # Priority order (1=highest)

    def to_dict(self) -> Dict[str, Any]:
        """Convert suggestion to dictionary."""
        return {
            'action': self.action,
            'description': self.description,
            'command': self.command,
            'priority': self.priority
        }


class SiteFiltersError(Exception):
    """
    Base exception for all SiteFilters errors.

    Carries an error code, recovery suggestions, and context for debugging.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize SiteFilters error.

        Args:
            message: Human-readable error description
            error_code: Standardized error code
            context: Contextual information about the error
            cause: Original exception that caused this error
            suggestions: List of recovery suggestions
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions = suggestions or []
        self.stack_trace = traceback.format_exc()

        if not self.context.correlation_id:
            self.context.correlation_id = str(uuid.uuid4())[:8]

        if not self.context.system_info:
            self.context.system_info = {
                'platform': sys.platform,
                'python_version': sys.version,
            }

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion to the error."""
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def get_user_message(self) -> str:
        """Get user-friendly error message with suggestions."""
        lines = [f"Error: {self.message}"]

        if self.error_code != ErrorCode.UNKNOWN_ERROR:
            lines.append(f"Error Code: {self.error_code.value}")

        if self.context.correlation_id:
            lines.append(f"Correlation ID: {self.context.correlation_id}")

        if self.suggestions:
            lines.append("\nSuggested solutions:")
            for i, suggestion in enumerate(self.suggestions[:3], 1):
                lines.append(f"  {i}. {suggestion.action}")
                lines.append(f"     {suggestion.description}")
                if suggestion.command:
                    lines.append(f"     Command: {suggestion.command}")

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get comprehensive debug information."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(self.cause).__name__ if self.cause else None,
                'message': str(self.cause) if self.cause else None
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
            'stack_trace': self.stack_trace
        }


class ConfigurationError(SiteFiltersError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.CONFIG_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Check the configuration path",
                description="Pass an existing YAML or JSON file with --config, or omit it to use defaults.",
                priority=1
            ))
        elif error_code in (ErrorCode.CONFIG_INVALID_VALUE, ErrorCode.CONFIG_SCHEMA_VALIDATION):
            self.add_suggestion(RecoverySuggestion(
                action="Check configuration values",
                description="Review the configuration file and SITEFILTERS_* environment variables for invalid values.",
                priority=1
            ))


class FilterRegistrationError(SiteFiltersError):
    """Exception for filter registration and plugin loading errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILTER_INVALID,
        filter_name: Optional[str] = None,
        plugin_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if filter_name:
            context.filter_name = filter_name
        if plugin_name:
            context.plugin_name = plugin_name

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.FILTER_ALREADY_REGISTERED:
            self.add_suggestion(RecoverySuggestion(
                action="Use a different filter name",
                description="Another plugin already registered this name. Rename the filter or pass replace=True.",
                priority=1
            ))
        elif error_code == ErrorCode.PLUGIN_LOAD_FAILED:
            self.add_suggestion(RecoverySuggestion(
                action="Disable entry point plugins",
                description="Run without third-party plugins to isolate the failing one.",
                command="SITEFILTERS_LOAD_ENTRY_POINTS=false sitefilters filters",
                priority=1
            ))


class TemplateRenderError(SiteFiltersError):
    """Exception for template lookup and rendering errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.TEMPLATE_RENDER_FAILED,
        template: Optional[str] = None,
        filter_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if template:
            context.template = template
        if filter_name:
            context.filter_name = filter_name

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.FILTER_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="List available filters",
                description="Filter names are case-sensitive. Check the registered names.",
                command="sitefilters filters",
                priority=1
            ))
        elif error_code == ErrorCode.TEMPLATE_UNDEFINED:
            self.add_suggestion(RecoverySuggestion(
                action="Provide the missing variable",
                description="Pass every variable the template uses, e.g. --var title='hello world'.",
                priority=1
            ))


def config_error(message: str, key: Optional[str] = None, **kwargs) -> ConfigurationError:
    """Create a configuration error with standard suggestions."""
    return ConfigurationError(message, config_key=key, **kwargs)


def registration_error(message: str, name: Optional[str] = None, **kwargs) -> FilterRegistrationError:
    """Create a filter registration error with filter context."""
    return FilterRegistrationError(message, filter_name=name, **kwargs)

"""
Plugin Manager

Discovers filter plugins (the built-in plugin, setuptools entry points, and
explicitly registered objects) and runs their registration hook against an
injected FilterRegistry.
"""

import logging
import weakref
from importlib.metadata import entry_points
from typing import Any, Dict, List, Optional, Sequence

import pluggy

from sitefilters.core.exceptions import ErrorCode, FilterRegistrationError
from sitefilters.core.plugins.hooks import FilterHooks, PROJECT_NAME
from sitefilters.core.registry import FilterRegistry
from sitefilters.plugins import builtin

ENTRY_POINT_GROUP = "sitefilters.plugins"


class PluginManager:
    """
    Central plugin management for SiteFilters.

    Provides:
    - Built-in plugin registration
    - Plugin discovery from entry points
    - One-shot filter registration per registry
    - Plugin status reporting
    """

    def __init__(
        self,
        load_entry_points: bool = True,
        plugins: Optional[Sequence[Any]] = None
    ):
        """
        Initialize the plugin manager.

        Args:
            load_entry_points: Load plugins from the sitefilters.plugins group
            plugins: Extra plugin modules or objects to register
        """
        self.logger = logging.getLogger(__name__)

        self.pm = pluggy.PluginManager(PROJECT_NAME)
        self.pm.add_hookspecs(FilterHooks)

        self._plugin_info: Dict[str, Dict[str, Any]] = {}
        self._populated: "weakref.WeakSet[FilterRegistry]" = weakref.WeakSet()

        self.register_plugin(builtin, name="builtin")

        for plugin in plugins or ():
            self.register_plugin(plugin)

        if load_entry_points:
            self.load_entry_point_plugins()

    def register_plugin(self, plugin: Any, name: Optional[str] = None) -> str:
        """
        Register a plugin module or object.

        Args:
            plugin: Object implementing register_template_filters
            name: Plugin name, defaults to __plugin_info__['name'] or pluggy's choice

        Returns:
            Name the plugin was registered under

        Raises:
            FilterRegistrationError: If the plugin is already registered or
                does not implement the hook correctly
        """
        info = dict(getattr(plugin, '__plugin_info__', None) or {})
        name = name or info.get('name')

        try:
            plugin_name = self.pm.register(plugin, name=name)
        except (ValueError, pluggy.PluginValidationError) as e:
            raise FilterRegistrationError(
                f"Failed to register plugin '{name or plugin}': {e}",
                error_code=ErrorCode.PLUGIN_LOAD_FAILED,
                plugin_name=name,
                cause=e
            ) from e

        info.setdefault('name', plugin_name)
        info.setdefault('description', (getattr(plugin, '__doc__', None) or "").strip().split('\n')[0])
        self._plugin_info[plugin_name] = info
        self.logger.info(f"Loaded plugin: {plugin_name}")
        return plugin_name

    def load_entry_point_plugins(self) -> int:
        """
        Load plugins advertised in the sitefilters.plugins entry point group.

        Returns:
            Number of plugins loaded
        """
        loaded = 0

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if self.pm.has_plugin(ep.name):
                self.logger.warning(f"Plugin '{ep.name}' is already loaded")
                continue

            try:
                plugin = ep.load()
            except Exception as e:
                raise FilterRegistrationError(
                    f"Failed to load entry point plugin '{ep.name}': {e}",
                    error_code=ErrorCode.PLUGIN_LOAD_FAILED,
                    plugin_name=ep.name,
                    cause=e
                ) from e

            self.register_plugin(plugin, name=ep.name)
            dist = getattr(ep, 'dist', None)
            self._plugin_info[ep.name]['version'] = getattr(dist, 'version', None) or '1.0.0'
            loaded += 1

        self.logger.debug(f"Loaded {loaded} entry point plugins")
        return loaded

    def register_filters(
        self,
        registry: FilterRegistry,
        aliases: Sequence[str] = ()
    ) -> List[str]:
        """
        Run every plugin's registration hook against a registry.

        Plugins run in registration order, so the built-in filters are
        registered first. Repeated calls with the same registry do nothing.

        Args:
            registry: Registry to populate
            aliases: Extra names for the title-case filter

        Returns:
            Names registered by this call

        Raises:
            FilterRegistrationError: If a plugin fails during registration
        """
        if registry in self._populated:
            self.logger.debug("Registry already populated, skipping plugin hooks")
            return []

        before = set(registry.names())
        hook_args = {'registry': registry, 'aliases': list(aliases)}

        for impl in self.pm.hook.register_template_filters.get_hookimpls():
            kwargs = {arg: hook_args[arg] for arg in impl.argnames}
            try:
                impl.function(**kwargs)
            except FilterRegistrationError as e:
                e.context.plugin_name = e.context.plugin_name or impl.plugin_name
                self.logger.error(f"Plugin '{impl.plugin_name}' failed to register filters: {e}")
                raise
            except Exception as e:
                self.logger.error(f"Plugin '{impl.plugin_name}' failed to register filters: {e}")
                raise FilterRegistrationError(
                    f"Plugin '{impl.plugin_name}' failed to register filters: {e}",
                    error_code=ErrorCode.PLUGIN_LOAD_FAILED,
                    plugin_name=impl.plugin_name,
                    cause=e
                ) from e

        self._populated.add(registry)
        added = [name for name in registry.names() if name not in before]
        self.logger.info(f"Registered {len(added)} filters from {len(self._plugin_info)} plugins")
        return added

    def list_plugins(self) -> List[str]:
        """Names of all loaded plugins in registration order."""
        return list(self._plugin_info)

    def get_plugin_status(self) -> Dict[str, Dict[str, Any]]:
        """Get status information for all plugins."""
        return {
            name: {
                'loaded': self.pm.has_plugin(name),
                'info': info,
            }
            for name, info in self._plugin_info.items()
        }

    def unregister_plugin(self, name: str) -> bool:
        """Unregister a plugin. Filters it already registered stay in place."""
        if not self.pm.has_plugin(name):
            self.logger.warning(f"Plugin '{name}' is not loaded")
            return False

        self.pm.unregister(name=name)
        self._plugin_info.pop(name, None)
        self.logger.info(f"Unloaded plugin: {name}")
        return True

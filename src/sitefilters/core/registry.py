"""
Filter Registry

Maps stable, case-sensitive filter names to callables. A registry is
created by the host application and injected wherever filters are
registered or installed into a template engine.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, MutableMapping, Optional, Sequence

from sitefilters.core.exceptions import ErrorCode, FilterRegistrationError
from sitefilters.filters.text import title_case, TITLE_CASE_FILTER_NAMES

FilterFunc = Callable[..., str]


@dataclass(frozen=True)
class FilterEntry:
    """A registered filter and where it came from."""

    name: str
    func: FilterFunc
    source: str = ""
    description: str = ""


def _describe(func: FilterFunc) -> str:
    doc = (getattr(func, '__doc__', None) or "").strip()
    return doc.splitlines()[0] if doc else ""


class FilterRegistry:
    """
    Registry for template filters.

    Registration is expected to finish before rendering starts; lookups
    after that point are read-only.
    """

    def __init__(self):
        self._entries: Dict[str, FilterEntry] = {}
        self.logger = logging.getLogger(__name__)

    def register(
        self,
        name: str,
        func: FilterFunc,
        source: str = "",
        replace: bool = False
    ) -> FilterEntry:
        """
        Register a filter under a name.

        Args:
            name: Filter name as used in template expressions
            func: Callable implementing the filter
            source: Plugin or component that registered the filter
            replace: Overwrite an existing entry with the same name

        Returns:
            The stored FilterEntry

        Raises:
            FilterRegistrationError: If the name or callable is invalid, or
                the name is taken and replace is False
        """
        if not isinstance(name, str) or not name.isidentifier():
            raise FilterRegistrationError(
                f"Invalid filter name: {name!r}",
                error_code=ErrorCode.FILTER_INVALID,
                filter_name=str(name),
                plugin_name=source or None
            )

        if not callable(func):
            raise FilterRegistrationError(
                f"Filter '{name}' is not callable",
                error_code=ErrorCode.FILTER_INVALID,
                filter_name=name,
                plugin_name=source or None
            )

        existing = self._entries.get(name)
        if existing is not None and not replace:
            if existing.func is func:
                return existing
            raise FilterRegistrationError(
                f"Filter '{name}' is already registered by '{existing.source or 'unknown'}'",
                error_code=ErrorCode.FILTER_ALREADY_REGISTERED,
                filter_name=name,
                plugin_name=source or None
            )

        entry = FilterEntry(name=name, func=func, source=source, description=_describe(func))
        self._entries[name] = entry
        self.logger.debug(f"Registered filter: {name} (source: {source or 'unknown'})")
        return entry

    def unregister(self, name: str) -> bool:
        """Remove a filter. Returns False if it was not registered."""
        if name not in self._entries:
            return False
        del self._entries[name]
        self.logger.debug(f"Unregistered filter: {name}")
        return True

    def get(self, name: str) -> Optional[FilterFunc]:
        """Get the callable registered under a name, or None."""
        entry = self._entries.get(name)
        return entry.func if entry else None

    def names(self) -> List[str]:
        """Registered filter names in registration order."""
        return list(self._entries)

    def entries(self) -> List[FilterEntry]:
        return list(self._entries.values())

    def as_mapping(self) -> Dict[str, FilterFunc]:
        """Get a plain {name: callable} copy of the registry."""
        return {name: entry.func for name, entry in self._entries.items()}

    def install(self, target: MutableMapping[str, FilterFunc]) -> int:
        """
        Copy every registered filter into a mutable mapping.

        Args:
            target: Filter table of a template engine, e.g. Environment.filters

        Returns:
            Number of filters installed
        """
        for name, entry in self._entries.items():
            target[name] = entry.func
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))


def register_filters(
    registry: FilterRegistry,
    aliases: Sequence[str] = (),
    source: str = "sitefilters"
) -> List[str]:
    """
    Register the built-in filters into a registry.

    Called once during host startup, before any template that uses the
    filters is rendered.

    Args:
        registry: Registry to populate
        aliases: Extra names for the title-case filter
        source: Source recorded on each entry

    Returns:
        Names that were registered
    """
    names = list(TITLE_CASE_FILTER_NAMES)
    names.extend(alias for alias in aliases if alias not in names)

    for name in names:
        registry.register(name, title_case, source=source)

    return names

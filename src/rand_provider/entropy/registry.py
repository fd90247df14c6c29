"""Registry of the plugins that feed the fallback generator.

A fallback plugin is a non-strong :class:`EntropySource` subclass whose
constructor takes a :class:`~rand_provider.config.RandConfig`. Built-in
plugins register with ``@register_fallback_source``; other packages
advertise theirs under the ``rand_provider.fallback_sources`` entry-point
group, which is read once, the first time a lookup misses.

Plugins are checked twice. The class must subclass ``EntropySource`` when
it is registered or loaded. The instance must report ``is_strong=False``
when :meth:`FallbackSourceRegistry.create` builds it, since strength is
only known per instance.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, Any

from rand_provider.entropy.base import EntropySource
from rand_provider.exceptions import InvalidPluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from rand_provider.config import RandConfig

logger = logging.getLogger("rand_provider")

ENTRY_POINT_GROUP = "rand_provider.fallback_sources"


def _require_source_class(name: str, obj: Any) -> type[EntropySource]:
    """Return *obj* if it is an ``EntropySource`` subclass.

    Raises:
        InvalidPluginError: Otherwise.
    """
    if isinstance(obj, type) and issubclass(obj, EntropySource):
        return obj
    raise InvalidPluginError(
        f"Fallback plugin {name!r} must be an EntropySource subclass, got {obj!r}"
    )


class FallbackSourceRegistry:
    """Name -> plugin class mapping that also builds validated plugin instances.

    Args:
        group: Entry-point group scanned for third-party plugins.
    """

    def __init__(self, group: str = ENTRY_POINT_GROUP) -> None:
        self._group = group
        self._plugins: dict[str, type[EntropySource]] = {}
        self._discovered = False

    def register(self, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Decorator registering a plugin class under *name*.

        A later registration under the same name replaces the earlier one.

        Raises:
            InvalidPluginError: If the decorated object is not an
                ``EntropySource`` subclass.
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            self._plugins[name] = _require_source_class(name, source_cls)
            return source_cls

        return decorator

    def names(self) -> list[str]:
        """Sorted names of every known plugin, entry points included."""
        self._discover()
        return sorted(self._plugins)

    def resolve(self, name: str) -> type[EntropySource]:
        """Return the plugin class registered under *name*.

        Raises:
            KeyError: If no built-in or entry-point plugin has that name.
        """
        if name not in self._plugins:
            self._discover()
        if name not in self._plugins:
            known = ", ".join(sorted(self._plugins)) or "(none)"
            raise KeyError(f"Unknown fallback source {name!r}; registered: {known}")
        return self._plugins[name]

    def create(self, name: str, config: RandConfig) -> EntropySource:
        """Instantiate plugin *name* with *config* and check its strength.

        Args:
            name: Registered plugin name.
            config: Passed to the plugin constructor.

        Returns:
            A ready, non-strong entropy source.

        Raises:
            KeyError: If *name* is unknown.
            InvalidPluginError: If the instance reports ``is_strong=True``.
        """
        source = self.resolve(name)(config)  # type: ignore[call-arg]
        if source.is_strong:
            source.close()
            raise InvalidPluginError(
                f"Fallback plugin {name!r} reports is_strong=True; "
                f"the fallback tier only accepts non-strong sources"
            )
        return source

    def _discover(self) -> None:
        """Load the entry-point group once. Explicit registrations win."""
        if self._discovered:
            return
        self._discovered = True
        try:
            eps = importlib.metadata.entry_points(group=self._group)
        except Exception:  # Intentional: broken metadata must not disable the fallback tier
            logger.warning("Could not read entry points for %s", self._group, exc_info=True)
            return

        for ep in eps:
            if ep.name in self._plugins:
                continue
            try:
                self._plugins[ep.name] = _require_source_class(ep.name, ep.load())
            except Exception:  # Intentional: one bad plugin must not hide the others
                logger.warning(
                    "Skipping fallback plugin entry point %r (%s)", ep.name, ep.value, exc_info=True
                )
                continue
            logger.debug("Registered fallback plugin %r from entry point %s", ep.name, ep.value)

    def _reset(self) -> None:
        """Forget every plugin and the discovery flag. **Test-only**."""
        self._plugins.clear()
        self._discovered = False


fallback_sources = FallbackSourceRegistry()
"""Process-wide registry used by :func:`build_fallback_generator`."""

register_fallback_source = fallback_sources.register

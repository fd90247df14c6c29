"""Fallback generator: the last, non-strong tier of the provider chain.

``FallbackGenerator`` mixes the output of one or more plugin sources from
:class:`~rand_provider.entropy.registry.FallbackSourceRegistry` through a
SHA-256 counter-mode expander. It is never used for ``strong`` requests.

One generator is shared by the whole process. It is built lazily, on the
first request that actually reaches the fallback tier, and guarded by a
lock so concurrent first use constructs exactly one instance.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from typing import TYPE_CHECKING, Any

from rand_provider.config import RandConfig
from rand_provider.entropy.base import EntropySource
from rand_provider.entropy.registry import FallbackSourceRegistry, fallback_sources
from rand_provider.exceptions import (
    EntropyUnavailableError,
    InvalidPluginError,
    MissingFallbackError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger("rand_provider")

_DIGEST_SIZE = hashlib.sha256().digest_size


def _mix(chunks: Sequence[bytes], n: int) -> bytes:
    """Condense *chunks* into a key and expand it to *n* bytes.

    Each chunk is length-prefixed so that different splits of the same
    concatenation produce different keys.
    """
    h = hashlib.sha256()
    h.update(time.perf_counter_ns().to_bytes(8, "big"))
    for chunk in chunks:
        h.update(len(chunk).to_bytes(4, "big"))
        h.update(chunk)
    key = h.digest()

    out = bytearray()
    for counter in range(-(-n // _DIGEST_SIZE)):
        out += hashlib.sha256(key + counter.to_bytes(8, "big")).digest()
    return bytes(out[:n])


class FallbackGenerator(EntropySource):
    """Medium-strength generator built from pluggable sub-sources.

    Args:
        sources: Plugin sources whose output is mixed together. Must not
            be empty.

    Raises:
        MissingFallbackError: If *sources* is empty.
    """

    def __init__(self, sources: Sequence[EntropySource]) -> None:
        if not sources:
            raise MissingFallbackError("Fallback generator requires at least one entropy plugin")
        self._sources = tuple(sources)

    @property
    def name(self) -> str:
        """Return ``'fallback(<plugin>+<plugin>...)'``."""
        return f"fallback({'+'.join(s.name for s in self._sources)})"

    @property
    def is_available(self) -> bool:
        """Returns ``True`` if any plugin is available."""
        return any(s.is_available for s in self._sources)

    @property
    def sources(self) -> tuple[EntropySource, ...]:
        """The plugin sources feeding the mixer."""
        return self._sources

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* mixed bytes.

        Plugins raising ``EntropyUnavailableError`` are skipped for this
        call; all other exceptions propagate.

        Raises:
            EntropyUnavailableError: If every plugin failed.
        """
        chunks: list[bytes] = []
        for source in self._sources:
            try:
                chunks.append(source.get_random_bytes(n))
            except EntropyUnavailableError:
                logger.debug("Fallback plugin %r unavailable, skipping", source.name)
        if not chunks:
            raise EntropyUnavailableError(f"No plugin of {self.name} could provide bytes")
        return _mix(chunks, n)

    def close(self) -> None:
        """Close every plugin source."""
        for source in self._sources:
            source.close()

    def health_check(self) -> dict[str, Any]:
        """Return health status for the generator and each plugin."""
        return {
            "source": self.name,
            "healthy": self.is_available,
            "strong": self.is_strong,
            "plugins": [s.health_check() for s in self._sources],
        }


def build_fallback_generator(
    config: RandConfig,
    registry: FallbackSourceRegistry | None = None,
) -> FallbackGenerator:
    """Instantiate the plugins named in ``config.fallback_sources``.

    Unknown or invalid plugins are logged and skipped.

    Args:
        config: Provides ``fallback_sources`` and plugin settings.
        registry: Where plugin names are resolved. Defaults to the
            process-wide registry.

    Returns:
        A new FallbackGenerator.

    Raises:
        MissingFallbackError: If no configured plugin could be built.
    """
    if registry is None:
        registry = fallback_sources

    sources: list[EntropySource] = []
    for name in config.fallback_source_names:
        try:
            sources.append(registry.create(name, config))
        except KeyError:
            logger.warning("Fallback plugin %r is not registered, skipping", name)
        except InvalidPluginError as e:
            logger.warning("Fallback plugin %r rejected, skipping: %s", name, e)

    if not sources:
        available = ", ".join(registry.names()) or "(none)"
        raise MissingFallbackError(
            f"No entropy plugin registered for the fallback generator "
            f"(configured: {config.fallback_sources!r}, available: {available})"
        )
    return FallbackGenerator(sources)


class LazyFallbackGenerator:
    """Thread-safe, build-once holder for a :class:`FallbackGenerator`.

    The first :meth:`get` call constructs the generator under a lock;
    every later call returns the same instance without locking. A failed
    construction leaves the holder empty so a later call can try again.

    Args:
        factory: Builds the generator from a config.
    """

    def __init__(
        self,
        factory: Callable[[RandConfig], FallbackGenerator] = build_fallback_generator,
    ) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._generator: FallbackGenerator | None = None

    @property
    def is_initialized(self) -> bool:
        """Whether the generator has been built."""
        return self._generator is not None

    def get(self, config: RandConfig | None = None) -> FallbackGenerator:
        """Return the generator, building it on first use.

        Args:
            config: Used only if this call performs the construction.

        Returns:
            The shared FallbackGenerator.

        Raises:
            MissingFallbackError: If construction finds no plugin.
        """
        generator = self._generator
        if generator is not None:
            return generator
        with self._lock:
            if self._generator is None:
                self._generator = self._factory(config or RandConfig.defaults())
                logger.warning(
                    "No strong entropy source usable; constructed non-strong fallback generator %r",
                    self._generator.name,
                )
            return self._generator

    def _reset(self) -> None:
        """Drop the built generator. **Test-only** — not part of public API."""
        with self._lock:
            self._generator = None


_process_fallback = LazyFallbackGenerator()


def get_fallback_generator(config: RandConfig | None = None) -> FallbackGenerator:
    """Return the process-wide fallback generator, building it once.

    Args:
        config: Used only by the call that performs construction; later
            calls return the existing instance unchanged.

    Raises:
        MissingFallbackError: If no entropy plugin is registered.
    """
    return _process_fallback.get(config)

"""Entropy source subsystem for rand-provider.

Re-exports the ABC, the fallback plugin registry, and all built-in source
implementations for convenient access::

    from rand_provider.entropy import EntropySource, FallbackSourceRegistry
    from rand_provider.entropy import OpenSSLEntropySource, UrandomEntropySource
"""

from rand_provider.entropy.base import EntropySource
from rand_provider.entropy.fallback import (
    FallbackGenerator,
    LazyFallbackGenerator,
    build_fallback_generator,
    get_fallback_generator,
)
from rand_provider.entropy.hash_timing import HashTimingSource
from rand_provider.entropy.mock import MockUniformSource, ScriptedEntropySource
from rand_provider.entropy.openssl import OpenSSLEntropySource
from rand_provider.entropy.registry import (
    FallbackSourceRegistry,
    fallback_sources,
    register_fallback_source,
)
from rand_provider.entropy.system import UrandomEntropySource

__all__ = [
    "EntropySource",
    "FallbackGenerator",
    "FallbackSourceRegistry",
    "HashTimingSource",
    "LazyFallbackGenerator",
    "MockUniformSource",
    "OpenSSLEntropySource",
    "ScriptedEntropySource",
    "UrandomEntropySource",
    "build_fallback_generator",
    "fallback_sources",
    "get_fallback_generator",
    "register_fallback_source",
]

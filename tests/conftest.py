"""Shared pytest fixtures for rand-provider tests.

Provides providers wired to deterministic or deliberately broken sources so
that the tier chain can be exercised without depending on the host's
OpenSSL build or urandom device.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rand_provider.config import RandConfig
from rand_provider.entropy.base import EntropySource
from rand_provider.entropy.fallback import FallbackGenerator, LazyFallbackGenerator
from rand_provider.entropy.mock import MockUniformSource, ScriptedEntropySource
from rand_provider.exceptions import EntropyUnavailableError
from rand_provider.provider import RandomProvider


class UnavailableSource(EntropySource):
    """Strong source that reports itself unavailable and fails if called."""

    def __init__(self, name: str = "unavailable") -> None:
        self._name = name
        self.call_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return False

    @property
    def is_strong(self) -> bool:
        return True

    def get_random_bytes(self, n: int) -> bytes:
        self.call_count += 1
        raise EntropyUnavailableError(f"{self._name} is unavailable")

    def close(self) -> None:
        pass


class CountingFallbackFactory:
    """Fallback factory that counts constructions and uses a seeded mock plugin."""

    def __init__(self) -> None:
        self.calls = 0
        self.plugin = MockUniformSource(seed=7, strong=False)

    def __call__(self, config: RandConfig) -> FallbackGenerator:
        self.calls += 1
        return FallbackGenerator([self.plugin])


@pytest.fixture
def default_config() -> RandConfig:
    """Return a RandConfig with all default values."""
    return RandConfig.defaults()


@pytest.fixture
def fallback_factory() -> CountingFallbackFactory:
    """Return a fresh counting fallback factory."""
    return CountingFallbackFactory()


@pytest.fixture
def lazy_fallback(fallback_factory: CountingFallbackFactory) -> LazyFallbackGenerator:
    """Return a private lazy fallback holder backed by the counting factory."""
    return LazyFallbackGenerator(fallback_factory)


@pytest.fixture
def uniform_provider(lazy_fallback: LazyFallbackGenerator) -> RandomProvider:
    """Return a provider drawing from a seeded strong uniform mock."""
    return RandomProvider(sources=[MockUniformSource(seed=42)], fallback=lazy_fallback)


@pytest.fixture
def scripted_provider(
    lazy_fallback: LazyFallbackGenerator,
) -> Callable[[bytes | list[int]], tuple[RandomProvider, ScriptedEntropySource]]:
    """Return a factory building a provider over a scripted byte sequence."""

    def _build(data: bytes | list[int]) -> tuple[RandomProvider, ScriptedEntropySource]:
        source = ScriptedEntropySource(data)
        return RandomProvider(sources=[source], fallback=lazy_fallback), source

    return _build


@pytest.fixture
def no_strong_provider(lazy_fallback: LazyFallbackGenerator) -> RandomProvider:
    """Return a provider whose strong tiers are both unavailable."""
    return RandomProvider(
        sources=[UnavailableSource("openssl"), UnavailableSource("urandom")],
        fallback=lazy_fallback,
    )

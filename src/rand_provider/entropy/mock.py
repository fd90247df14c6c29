"""Test doubles for driving the provider deterministically.

Neither source is registered as a fallback plugin; tests inject them into
:class:`~rand_provider.provider.RandomProvider` directly.
"""

from __future__ import annotations

import numpy as np

from rand_provider.entropy.base import EntropySource
from rand_provider.exceptions import EntropyUnavailableError


class MockUniformSource(EntropySource):
    """Seeded uniform byte source.

    Args:
        seed: Optional RNG seed for reproducible output.
        strong: Value reported by :attr:`is_strong`.
        available: Value reported by :attr:`is_available`.
    """

    def __init__(self, seed: int | None = None, strong: bool = True, available: bool = True) -> None:
        self._rng = np.random.default_rng(seed)
        self._strong = strong
        self._available = available
        self.call_count = 0

    @property
    def name(self) -> str:
        """Return ``'mock_uniform'``."""
        return "mock_uniform"

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def is_strong(self) -> bool:
        return self._strong

    def get_random_bytes(self, n: int) -> bytes:
        """Draw *n* bytes uniformly from ``[0, 255]``."""
        self.call_count += 1
        return self._rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()

    def close(self) -> None:
        """No-op — no resources to release."""


class ScriptedEntropySource(EntropySource):
    """Replays a fixed byte script, consuming it front to back.

    Args:
        data: Bytes to hand out, in order.
        strong: Value reported by :attr:`is_strong`.

    Raises on exhaustion with :class:`EntropyUnavailableError`, so a test
    that consumes more than it scripted fails loudly.
    """

    def __init__(self, data: bytes | list[int], strong: bool = True) -> None:
        self._data = bytes(data)
        self._offset = 0
        self._strong = strong
        self.call_count = 0
        self.requests: list[int] = []

    @property
    def name(self) -> str:
        """Return ``'scripted'``."""
        return "scripted"

    @property
    def is_available(self) -> bool:
        return True

    @property
    def is_strong(self) -> bool:
        return self._strong

    @property
    def remaining(self) -> int:
        """Number of scripted bytes not yet handed out."""
        return len(self._data) - self._offset

    def get_random_bytes(self, n: int) -> bytes:
        """Return the next *n* scripted bytes."""
        self.call_count += 1
        self.requests.append(n)
        if n > self.remaining:
            raise EntropyUnavailableError(
                f"Scripted source exhausted: requested {n}, {self.remaining} left"
            )
        chunk = self._data[self._offset : self._offset + n]
        self._offset += n
        return chunk

    def close(self) -> None:
        """No-op — no resources to release."""

"""Timing-jitter fallback plugin.

Derives bytes from variations in CPU instruction timing:

  1. For each byte requested, perform 8 timing measurements.
  2. Each measurement times a tight loop of SHA-256 hash operations.
  3. Extract the least-significant bit of the nanosecond delta.
  4. Combine 8 bits into one byte.

Output depends on scheduling, cache state and thermal throttling. It is
NOT cryptographically strong and is only ever used through the fallback
generator, which whitens it before handing it out.
"""

from __future__ import annotations

import hashlib
import time
from typing import TYPE_CHECKING

from rand_provider.entropy.base import EntropySource
from rand_provider.entropy.registry import register_fallback_source

if TYPE_CHECKING:
    from rand_provider.config import RandConfig

_BITS_PER_BYTE = 8
_SEED = b"rand_provider.hash_timing"


def _generate_timing_bytes(n: int, hash_iterations: int) -> bytes:
    """Generate *n* bytes from CPU timing jitter.

    Args:
        n: Number of bytes to generate.
        hash_iterations: SHA-256 rounds per timing measurement. More rounds
            means more timing variance but also more latency.

    Returns:
        Exactly *n* bytes of timing-derived entropy.
    """
    result = bytearray(n)
    for i in range(n):
        byte_val = 0
        for bit in range(_BITS_PER_BYTE):
            t0 = time.perf_counter_ns()
            h = hashlib.sha256(_SEED)
            for _ in range(hash_iterations):
                h = hashlib.sha256(h.digest())
            t1 = time.perf_counter_ns()
            byte_val |= ((t1 - t0) & 1) << bit
        result[i] = byte_val
    return bytes(result)


@register_fallback_source("hash_timing")
class HashTimingSource(EntropySource):
    """SHA-256 timing-jitter source.

    Args:
        config: Provides ``hash_timing_iterations``.
    """

    def __init__(self, config: RandConfig) -> None:
        self._hash_iterations = config.hash_timing_iterations

    @property
    def name(self) -> str:
        """Return ``'hash_timing'``."""
        return "hash_timing"

    @property
    def is_available(self) -> bool:
        """Always ``True``; only needs a monotonic clock."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* timing-jitter bytes."""
        return _generate_timing_bytes(n, self._hash_iterations)

    def close(self) -> None:
        """No-op — no resources to release."""

"""Pseudorandom data provider.

``RandomProvider.get_bytes()`` is the only method that talks to entropy
sources. Booleans, bounded integers, unit floats and alphabet strings are
all built on top of it, so every generator inherits the same source chain
and the same ``strong`` contract:

1. Strong OS tiers, in order (OpenSSL, then the kernel urandom device).
   A tier that is unavailable, raises ``EntropyUnavailableError`` or
   returns a short read is skipped, never retried.
2. ``strong=True`` with no usable tier raises
   ``EnvironmentUnsupportedError``.
3. Otherwise the process-wide fallback generator is built (once) and used.

The module also exposes ``get_bytes``/``get_boolean``/``get_integer``/
``get_float``/``get_string`` functions bound to a default provider.
"""

from __future__ import annotations

import base64
import logging
import math
import sys
from typing import TYPE_CHECKING, Any, Final, Literal

import numpy as np

from rand_provider.config import RandConfig
from rand_provider.entropy.fallback import LazyFallbackGenerator, _process_fallback
from rand_provider.entropy.openssl import OpenSSLEntropySource
from rand_provider.entropy.system import UrandomEntropySource
from rand_provider.exceptions import (
    DomainError,
    EntropyUnavailableError,
    EnvironmentUnsupportedError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rand_provider.entropy.base import EntropySource

logger = logging.getLogger("rand_provider")

NO_DATA: Final = False
"""Returned by ``get_bytes()`` for ``length <= 0``."""

# Largest supported ``max - min``; the native signed machine word.
_MAX_RANGE: Final[int] = sys.maxsize

# Base64 turns every 3 input bytes into 4 output characters.
_BASE64_BYTES_PER_CHAR: Final[float] = 0.75

# Float construction: 7 entropy bytes give 52 mantissa bits plus a nibble
# that is forced to 0xF, and 0x3F completes sign=0, exponent=1023.
_FLOAT_ENTROPY_BYTES: Final[int] = 7
_FLOAT_HIGH_NIBBLE: Final[int] = 0xF0
_FLOAT_EXPONENT_BYTE: Final[int] = 0x3F


class RandomProvider:
    """Bytes, booleans, integers, floats and strings from a tiered source chain.

    Args:
        config: Fallback and rejection-sampling settings. Defaults to
            :meth:`RandConfig.defaults`, which never reads the environment.
        sources: Strong tiers tried in order. Defaults to OpenSSL followed
            by the kernel urandom device.
        fallback: Holder for the non-strong fallback generator. Defaults to
            the process-wide one.
    """

    def __init__(
        self,
        config: RandConfig | None = None,
        sources: Sequence[EntropySource] | None = None,
        fallback: LazyFallbackGenerator | None = None,
    ) -> None:
        self._config = config or RandConfig.defaults()
        if sources is None:
            sources = (OpenSSLEntropySource(), UrandomEntropySource())
        self._sources = tuple(sources)
        self._fallback = fallback if fallback is not None else _process_fallback

    @property
    def config(self) -> RandConfig:
        """The active configuration."""
        return self._config

    @property
    def sources(self) -> tuple[EntropySource, ...]:
        """Strong tiers, in the order they are tried."""
        return self._sources

    def get_bytes(self, length: int, strong: bool = False) -> bytes | Literal[False]:
        """Return *length* random bytes.

        Args:
            length: Number of bytes. Values ``<= 0`` return :data:`NO_DATA`.
            strong: Require a cryptographically strong source.

        Returns:
            Exactly *length* bytes, or :data:`NO_DATA` for ``length <= 0``.

        Raises:
            EnvironmentUnsupportedError: If *strong* and no strong tier works.
            MissingFallbackError: If the fallback tier has no plugin.
        """
        if length <= 0:
            return NO_DATA

        for source in self._sources:
            if not source.is_available:
                logger.debug("Entropy source %r is not available, skipping", source.name)
                continue
            if not source.is_strong:
                logger.debug("Entropy source %r is not cryptographically strong, skipping", source.name)
                continue
            try:
                data = source.get_random_bytes(length)
            except EntropyUnavailableError as e:
                logger.debug("Entropy source %r failed, skipping: %s", source.name, e)
                continue
            if len(data) == length:
                return data
            logger.debug(
                "Entropy source %r returned %d of %d bytes, skipping",
                source.name,
                len(data),
                length,
            )

        if strong:
            raise EnvironmentUnsupportedError(
                "This environment doesn't support secure random number generation: "
                "no cryptographically strong source (OpenSSL or the OS urandom "
                "device) is usable"
            )

        generator = self._fallback.get(self._config)
        return generator.get_random_bytes(length)

    def get_boolean(self, strong: bool = False) -> bool:
        """Return ``True`` iff a random byte is odd."""
        byte = self.get_bytes(1, strong)
        return bool(byte[0] % 2)

    def get_integer(self, min_value: int, max_value: int, strong: bool = False) -> int:
        """Return a uniform integer in ``[min_value, max_value]``.

        Uses rejection sampling against the tightest power-of-two mask
        covering the range, so there is no modulo bias. A degenerate range
        returns immediately without touching any source.

        The loop has no iteration cap unless ``max_rejection_draws`` is set;
        with a working source it terminates almost surely, but a broken or
        constant source can keep it spinning.

        Args:
            min_value: Inclusive lower bound.
            max_value: Inclusive upper bound.
            strong: Require a cryptographically strong source.

        Returns:
            An integer ``min_value <= n <= max_value``.

        Raises:
            DomainError: If the bounds are not integers, ``min_value > max_value``,
                or the range exceeds ``sys.maxsize``.
            EntropyUnavailableError: If ``max_rejection_draws`` is exceeded.
        """
        if not isinstance(min_value, int) or not isinstance(max_value, int):
            raise DomainError("min and max must be integers")
        if min_value > max_value:
            raise DomainError("min must not exceed max")

        value_range = max_value - min_value
        if value_range == 0:
            return max_value
        if value_range > _MAX_RANGE:
            raise DomainError("range too large")

        bits = value_range.bit_length()
        # Smallest whole number of bytes holding `bits`: 255 -> 1, 65535 -> 2.
        num_bytes = (bits - 1) // 8 + 1
        mask = (1 << bits) - 1
        cap = self._config.max_rejection_draws

        draws = 0
        while True:
            draws += 1
            value = int.from_bytes(self.get_bytes(num_bytes, strong), "big") & mask
            if value <= value_range:
                break
            if cap and draws >= cap:
                raise EntropyUnavailableError(
                    f"Rejection sampling exceeded {cap} draws for range {value_range}; "
                    f"the entropy source looks degenerate"
                )

        if draws > 1:
            logger.debug("Rejection sampling for range %d took %d draws", value_range, draws)
        return min_value + value

    def get_float(self, strong: bool = False) -> float:
        """Return a uniform float in ``[0, 1)`` with 52 random mantissa bits.

        The bytes are laid out as a little-endian IEEE-754 double with sign
        0 and exponent 1023, i.e. a value in ``[1, 2)``, then shifted down.
        """
        buf = bytearray(self.get_bytes(_FLOAT_ENTROPY_BYTES, strong))
        buf[_FLOAT_ENTROPY_BYTES - 1] |= _FLOAT_HIGH_NIBBLE
        buf.append(_FLOAT_EXPONENT_BYTE)
        return float(np.frombuffer(bytes(buf), dtype="<f8")[0]) - 1.0

    def get_string(self, length: int, charlist: str | None = None, strong: bool = False) -> str:
        """Return a random string of *length* characters.

        Without *charlist* the standard base64 alphabet is used. With a
        one-character *charlist* that character is repeated. Otherwise
        each position advances a running index by the next random byte,
        modulo ``len(charlist)``, and emits the character there.

        Args:
            length: Number of characters, at least 1.
            charlist: Alphabet to draw from.
            strong: Require a cryptographically strong source.

        Raises:
            DomainError: If *length* < 1.
        """
        if length < 1:
            raise DomainError("Length should be >= 1")

        if not charlist:
            num_bytes = math.ceil(length * _BASE64_BYTES_PER_CHAR)
            encoded = base64.b64encode(self.get_bytes(num_bytes, strong)).decode("ascii")
            return encoded.rstrip("=")[:length]

        list_len = len(charlist)
        if list_len == 1:
            return charlist * length

        pos = 0
        chars: list[str] = []
        for byte in self.get_bytes(length, strong):
            pos = (pos + byte) % list_len
            chars.append(charlist[pos])
        return "".join(chars)

    def health_check(self) -> dict[str, Any]:
        """Return status for every strong tier and the fallback tier.

        Returns:
            Dictionary with ``'tiers'``, ``'strong_available'`` and
            ``'fallback_initialized'`` keys.
        """
        tiers = [source.health_check() for source in self._sources]
        return {
            "tiers": tiers,
            "strong_available": any(t["healthy"] and t["strong"] for t in tiers),
            "fallback_initialized": self._fallback.is_initialized,
        }


default_provider = RandomProvider()


def get_bytes(length: int, strong: bool = False) -> bytes | Literal[False]:
    """See :meth:`RandomProvider.get_bytes`."""
    return default_provider.get_bytes(length, strong)


def get_boolean(strong: bool = False) -> bool:
    """See :meth:`RandomProvider.get_boolean`."""
    return default_provider.get_boolean(strong)


def get_integer(min_value: int, max_value: int, strong: bool = False) -> int:
    """See :meth:`RandomProvider.get_integer`."""
    return default_provider.get_integer(min_value, max_value, strong)


def get_float(strong: bool = False) -> float:
    """See :meth:`RandomProvider.get_float`."""
    return default_provider.get_float(strong)


def get_string(length: int, charlist: str | None = None, strong: bool = False) -> str:
    """See :meth:`RandomProvider.get_string`."""
    return default_provider.get_string(length, charlist, strong)

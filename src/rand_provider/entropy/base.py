"""Abstract base class for all entropy sources.

Every source (OpenSSL, the kernel urandom device, a timing-jitter plugin
or a test double) implements this interface. Subclasses must implement
the four abstract members: ``name``, ``is_available``, ``get_random_bytes()``,
and ``close()``. ``is_strong`` defaults to ``False``; only sources whose
output is fit for cryptography override it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class EntropySource(ABC):
    """Abstract base for all entropy sources.

    Implementations must provide random bytes on demand and report whether
    those bytes are cryptographically usable.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'openssl'``, ``'urandom'``)."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the source can currently provide entropy."""

    @property
    def is_strong(self) -> bool:
        """Whether output from this source is suitable for cryptography."""
        return False

    @abstractmethod
    def get_random_bytes(self, n: int) -> bytes:
        """Return exactly *n* random bytes.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            EntropyUnavailableError: If the source cannot provide bytes.
        """

    @abstractmethod
    def close(self) -> None:
        """Release resources (file handles, pools)."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with ``'source'``, ``'healthy'`` and ``'strong'`` keys.
        """
        return {"source": self.name, "healthy": self.is_available, "strong": self.is_strong}

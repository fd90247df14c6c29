"""Secondary entropy source using ``os.urandom()``.

Reads the kernel urandom device (``getrandom(2)`` or ``/dev/urandom``) on
POSIX and the system CSPRNG on Windows. Cryptographically secure, used
when the OpenSSL tier is unusable.
"""

from __future__ import annotations

import os

from rand_provider.entropy.base import EntropySource
from rand_provider.exceptions import EntropyUnavailableError

_URANDOM_PATH = "/dev/urandom"


class UrandomEntropySource(EntropySource):
    """``os.urandom()`` wrapper, the secondary strong source."""

    @property
    def name(self) -> str:
        """Return ``'urandom'``."""
        return "urandom"

    @property
    def is_available(self) -> bool:
        """Whether a readable urandom device or the Windows CSPRNG exists."""
        if os.name == "nt":
            return True
        return os.path.exists(_URANDOM_PATH) and os.access(_URANDOM_PATH, os.R_OK)

    @property
    def is_strong(self) -> bool:
        """Always ``True``."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the OS CSPRNG.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy from ``os.urandom()``.

        Raises:
            EntropyUnavailableError: If the OS randomness source fails.
        """
        try:
            return os.urandom(n)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailableError(f"os.urandom failed: {e}") from e

    def close(self) -> None:
        """No-op — no resources to release."""

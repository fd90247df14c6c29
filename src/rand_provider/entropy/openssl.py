"""Primary entropy source backed by the OpenSSL CSPRNG.

Wraps ``ssl.RAND_bytes()``. The ``ssl`` module is missing on interpreters
built without OpenSSL, so this module degrades gracefully when it cannot
be imported.
"""

from __future__ import annotations

from rand_provider.entropy.base import EntropySource
from rand_provider.exceptions import EntropyUnavailableError

# ---------------------------------------------------------------------------
# Import guard — no crash when Python was built without OpenSSL
# ---------------------------------------------------------------------------

try:
    import ssl

    _SSL_AVAILABLE = hasattr(ssl, "RAND_bytes") and hasattr(ssl, "RAND_status")
except ImportError:
    _SSL_AVAILABLE = False


class OpenSSLEntropySource(EntropySource):
    """OpenSSL ``RAND_bytes``, the preferred strong source.

    Bytes are only handed out once OpenSSL confirms its generator has been
    seeded with enough entropy (``RAND_status() == 1``). Otherwise the
    source raises :class:`EntropyUnavailableError` so the caller can move
    on to the next tier.
    """

    @property
    def name(self) -> str:
        """Return ``'openssl'``."""
        return "openssl"

    @property
    def is_available(self) -> bool:
        """Whether the interpreter exposes the OpenSSL random API."""
        return _SSL_AVAILABLE

    @property
    def is_strong(self) -> bool:
        """Always ``True``."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the OpenSSL CSPRNG.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* cryptographically strong bytes.

        Raises:
            EntropyUnavailableError: If OpenSSL is missing, unseeded, or
                reports an error.
        """
        if not _SSL_AVAILABLE:
            raise EntropyUnavailableError("OpenSSL random API is not available")
        if not ssl.RAND_status():
            raise EntropyUnavailableError("OpenSSL PRNG has not been seeded")
        try:
            return ssl.RAND_bytes(n)
        except ssl.SSLError as e:
            raise EntropyUnavailableError(f"OpenSSL RAND_bytes failed: {e}") from e

    def close(self) -> None:
        """No-op — no resources to release."""

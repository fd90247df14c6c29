"""rand-provider: tiered pseudorandom data with an explicit strength contract.

Produces bytes, booleans, bounded integers, unit-interval floats and
alphabet-constrained strings. Entropy comes from OpenSSL or the OS urandom
device; requests that do not demand cryptographic strength may fall back
to a timing-jitter generator when neither is usable.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("rand-provider")
except PackageNotFoundError:
    __version__ = "0.0.0"

from rand_provider.config import RandConfig, load_config
from rand_provider.entropy.fallback import get_fallback_generator
from rand_provider.exceptions import (
    ConfigValidationError,
    DomainError,
    EntropyUnavailableError,
    EnvironmentUnsupportedError,
    InvalidPluginError,
    MissingFallbackError,
    RandProviderError,
)
from rand_provider.provider import (
    NO_DATA,
    RandomProvider,
    default_provider,
    get_boolean,
    get_bytes,
    get_float,
    get_integer,
    get_string,
)

__all__ = [
    "NO_DATA",
    "ConfigValidationError",
    "DomainError",
    "EntropyUnavailableError",
    "EnvironmentUnsupportedError",
    "InvalidPluginError",
    "MissingFallbackError",
    "RandConfig",
    "RandProviderError",
    "RandomProvider",
    "__version__",
    "default_provider",
    "get_boolean",
    "get_bytes",
    "get_fallback_generator",
    "get_float",
    "get_integer",
    "get_string",
    "load_config",
]

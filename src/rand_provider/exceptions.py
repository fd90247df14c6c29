"""Exception hierarchy for rand-provider.

All exceptions derive from RandProviderError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class RandProviderError(Exception):
    """Base exception for all rand-provider errors."""


class EntropyUnavailableError(RandProviderError):
    """A single entropy source cannot provide bytes.

    Raised by individual sources. The provider treats it as "skip this
    tier" and moves on to the next one in the chain.
    """


class EnvironmentUnsupportedError(RandProviderError):
    """A strong request was made but no cryptographic source exists.

    Never retried and never downgraded to the fallback generator.
    """


class MissingFallbackError(RandProviderError):
    """The fallback generator is needed but has no usable entropy plugin."""


class DomainError(RandProviderError):
    """Invalid arguments (``min > max``, range too large, ``length < 1``)."""


class ConfigValidationError(RandProviderError):
    """Configuration field validation failed."""


class InvalidPluginError(RandProviderError):
    """A fallback plugin is not an EntropySource or claims to be strong."""

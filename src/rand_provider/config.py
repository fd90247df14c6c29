"""Configuration system for rand-provider.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (RAND_*) -> .env file -> field defaults.

The generators themselves never read the environment. The default provider
is built from :meth:`RandConfig.defaults`; callers who want environment
overrides opt in through :func:`load_config`.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from rand_provider.exceptions import ConfigValidationError


class RandConfig(BaseSettings):
    """Configuration for rand-provider.

    Only the fallback tier and the rejection-sampling guard are tunable.
    The OS-backed tiers have no knobs.
    """

    model_config = SettingsConfigDict(
        env_prefix="RAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Fallback generator ---

    fallback_sources: str = Field(
        default="hash_timing",
        description="Comma-separated fallback plugin names mixed by the fallback generator",
    )
    hash_timing_iterations: int = Field(
        default=32,
        ge=1,
        description="SHA-256 rounds per timing measurement in the hash_timing plugin",
    )

    # --- Rejection sampling ---

    max_rejection_draws: int = Field(
        default=0,
        ge=0,
        description="Abort get_integer after this many rejected draws (0 = unbounded)",
    )

    @classmethod
    def defaults(cls) -> RandConfig:
        """Return a config built from field defaults only.

        Skips the environment and ``.env`` file entirely.

        Returns:
            A RandConfig populated with the declared defaults.
        """
        return cls.model_construct()

    @property
    def fallback_source_names(self) -> list[str]:
        """Parsed, de-blanked list of ``fallback_sources``."""
        return [s.strip() for s in self.fallback_sources.split(",") if s.strip()]


def load_config(**overrides: Any) -> RandConfig:
    """Load configuration from kwargs, ``RAND_*`` env vars and ``.env``.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        A validated RandConfig.

    Raises:
        ConfigValidationError: If any field fails validation.
    """
    try:
        return RandConfig(**overrides)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid rand-provider configuration: {e}") from e

"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for state storage.

Usage:
    from statestore.config import StorageSettings

    # Load from environment variables (STATESTORE_*)
    settings = StorageSettings()

    # Or override with explicit values
    settings = StorageSettings(strict=False, sampler_seed=42)
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for StateStorage archives and samplers.

    Attributes:
        strict: Raise on load/store failures. When False, failures are reported
            through an ArchiveWarning and the call returns (diagnostic mode).
        sampler_seed: Seed for precomputed samplers built from stored states
            (None for a nondeterministic seed).

    Environment Variables:
        STATESTORE_STRICT
        STATESTORE_SAMPLER_SEED
    """

    model_config = SettingsConfigDict(
        env_prefix="STATESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict: bool = True
    sampler_seed: int | None = None

"""Configuration module using Pydantic Settings.

Usage:
    from statestore.config import StorageSettings

    settings = StorageSettings(strict=False)
"""

from statestore.config.settings import StorageSettings

__all__ = [
    "StorageSettings",
]

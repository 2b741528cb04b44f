"""Configuration module with YAML and environment variable support."""

from .settings import Settings, UpsertPolicy, get_settings


__all__ = [
    "Settings",
    "UpsertPolicy",
    "get_settings",
]

"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .registries import (
    PlatformsConfig,
    RegistriesConfig,
    RegistryConfig,
    RuntimeVersionsConfig,
    get_registries_config,
    load_registries_config,
    parse_registries_config,
)
from .storage import StorageConfig, get_http_cache_path, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "PlatformsConfig",
    "RateLimit",
    "RegistriesConfig",
    "RegistryConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "RuntimeVersionsConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_http_cache_path",
    "get_registries_config",
    "get_storage_config",
    "load_registries_config",
    "optional_env_var",
    "parse_registries_config",
]

"""Filesystem locations: the user configuration directory and the HTTP response cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "extcat"
HTTP_CACHE_FILENAME: Final[str] = "registry-responses.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    cache_dir: Path
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        """Return the sqlite file shared by registries configured with ``cache = "sqlite"``."""

        cache_dir = self.cache_dir.expanduser().resolve()
        if ensure:
            cache_dir.mkdir(parents=True, exist_ok=True)
        return cache_dir / self.http_cache_filename


def _xdg_dir(variable: str, fallback: str) -> Path:
    base = optional_env_var(variable)
    base_path = Path(base) if base else Path.home() / fallback
    return (base_path / APP_DIR_NAME).expanduser()


def default_config_dir() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", ".config")


def default_cache_dir() -> Path:
    return _xdg_dir("XDG_CACHE_HOME", ".cache")


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("EXTCAT_CACHE_DIR")
    return StorageConfig(cache_dir=Path(env_dir) if env_dir else default_cache_dir())


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path()

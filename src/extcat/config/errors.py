"""Errors raised while loading the registry configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """Raised when the registry configuration is invalid.

    ``source`` is the configuration file the problem was found in, when there is one.
    """

    def __init__(self, message: str, *, source: Path | None = None) -> None:
        super().__init__(f"{source}: {message}" if source is not None else message)
        self.source = source


class MissingConfigurationError(ConfigurationError):
    def __init__(self, path: Path) -> None:
        super().__init__("registry configuration file not found", source=path)

"""Construct registry endpoints from their configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from extcat.domain.errors import EndpointConstructionError

from .http import HttpRegistryEndpoint
from .local import LocalRegistryEndpoint

if TYPE_CHECKING:
    from extcat.config.registries import RegistryConfig
    from extcat.domain.ports import RegistryEndpoint


def build_registry_endpoint(config: RegistryConfig) -> RegistryEndpoint:
    """Pick the transport from the configuration: ``url`` for HTTP, ``path`` for a directory."""

    if config.url is not None and config.path is not None:
        raise EndpointConstructionError(
            f"Registry {config.id} configures both a url and a path", registry_id=config.id
        )
    if config.url is not None:
        if not config.url.startswith(("http://", "https://")):
            raise EndpointConstructionError(
                f"Registry {config.id} url must use http or https: {config.url}",
                registry_id=config.id,
            )
        return HttpRegistryEndpoint(config=config)
    if config.path is not None:
        return LocalRegistryEndpoint(config=config)
    raise EndpointConstructionError(
        f"Registry {config.id} configures neither a url nor a path", registry_id=config.id
    )

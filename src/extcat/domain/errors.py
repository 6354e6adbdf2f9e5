"""Errors raised while resolving catalogs from registries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class RegistryResolutionError(RuntimeError):
    """Base class for catalog resolution failures."""


class NoRegistriesError(RegistryResolutionError):
    """Raised when a resolution is requested but no registry is usable."""

    def __init__(self) -> None:
        super().__init__("No registries configured")


class EmptyPlatformCatalogError(RegistryResolutionError):
    def __init__(self, registry_id: str) -> None:
        super().__init__(f"Registry {registry_id} does not provide any platform")
        self.registry_id = registry_id


class ExclusiveProviderConflictError(RegistryResolutionError):
    """Raised when more than one registry claims to be the sole provider of something."""

    def __init__(self, registry_ids: Sequence[str], *, subject: str) -> None:
        self.registry_ids = tuple(registry_ids)
        self.subject = subject
        super().__init__(
            f"The following registries were configured as exclusive providers of {subject}: "
            + ", ".join(self.registry_ids)
        )


class EndpointResolutionError(RegistryResolutionError):
    """Raised by a registry endpoint that cannot produce a catalog it was asked for."""

    def __init__(self, message: str, *, registry_id: str) -> None:
        super().__init__(message)
        self.registry_id = registry_id


class EndpointConstructionError(RegistryResolutionError):
    def __init__(self, message: str, *, registry_id: str) -> None:
        super().__init__(message)
        self.registry_id = registry_id

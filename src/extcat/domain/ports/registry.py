"""Port for one enabled, reachable registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from extcat.domain.model import (
        ArtifactCoords,
        Classification,
        ExtensionCatalog,
        Platform,
        PlatformCatalog,
    )


@runtime_checkable
class RegistryEndpoint(Protocol):
    """Capability interface implemented once per registry transport.

    Classification is answered from local configuration and never touches the
    network. The resolve operations may be awaited concurrently; an endpoint must
    tolerate that.

    Resolvers enter the endpoint with ``async with`` for the duration of one
    resolution; connections and response caches may be held open until exit.
    """

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    @property
    def id(self) -> str: ...

    def classify_platform(self, bom: ArtifactCoords) -> Classification: ...

    def classify_runtime_version(self, version: str) -> Classification: ...

    async def resolve_platform_catalog(self, version: str | None = None) -> PlatformCatalog | None:
        """Return the platforms of this registry, optionally scoped to ``version``."""
        ...

    async def resolve_default_platform(self) -> Platform:
        """Return the recommended platform; raise ``EndpointResolutionError`` if none."""
        ...

    async def resolve_platform_extensions(self, bom: ArtifactCoords) -> ExtensionCatalog:
        """Return the extension catalog of ``bom``; raise ``EndpointResolutionError`` if unknown."""
        ...

    async def resolve_non_platform_extensions(self, version: str) -> ExtensionCatalog | None: ...

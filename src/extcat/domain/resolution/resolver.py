"""Catalog resolution across every configured registry.

Entry points:
- ``resolve_platform_catalog``: the platforms offered by all registries
- ``resolve_extension_catalog``: the extensions compatible with a runtime core
  version, a set of explicitly selected platforms, or the registries' defaults

Registry calls are awaited concurrently where they are independent. Results are
always reassembled in registry configuration order, then platform order, so the
outcome never depends on which call finishes first. A failing call cancels its
siblings. Every endpoint is held open, with its connections and response cache,
for the duration of one top-level resolution.
"""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from extcat.domain.errors import (
    EmptyPlatformCatalogError,
    EndpointResolutionError,
    NoRegistriesError,
)

from .aggregation import merge_platform_catalogs
from .fanout import gather_in_order
from .filtering import filter_endpoints, platform_subject, runtime_version_subject
from .merge import merge_extension_catalogs
from .walker import VersionGraphWalker

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from extcat.domain.model import ArtifactCoords, ExtensionCatalog, PlatformCatalog
    from extcat.domain.ports import CatalogMerger, RegistryEndpoint

    from .walker import EndpointsByVersion

log = getLogger(__name__)


@dataclass(slots=True)
class CatalogResolver:
    """Resolve unified platform and extension catalogs from ordered registries.

    ``endpoints`` are fixed for the lifetime of the resolver; their order is the
    registry precedence order.
    """

    endpoints: tuple[RegistryEndpoint, ...]
    merger: CatalogMerger = field(default=merge_extension_catalogs)

    @property
    def has_registries(self) -> bool:
        return bool(self.endpoints)

    def resolve_platform_catalog(self, version: str | None = None) -> PlatformCatalog | None:
        return asyncio.run(self._in_session(partial(self._resolve_platform_catalog_async, version)))

    def resolve_extension_catalog(
        self,
        version: str | None = None,
        *,
        platforms: Sequence[ArtifactCoords] | None = None,
    ) -> ExtensionCatalog:
        """Resolve the merged extension catalog.

        With ``platforms`` the catalog is built around those platform BOMs, with
        ``version`` around that runtime core version, otherwise around the default
        platform of the registries. An empty ``platforms`` list counts as absent.
        """

        if version is not None and platforms:
            raise ValueError("Pass either a runtime core version or platforms, not both")
        if platforms:
            return asyncio.run(
                self._in_session(partial(self._resolve_for_platforms_async, tuple(platforms)))
            )
        return asyncio.run(self._in_session(partial(self._resolve_for_version_async, version)))

    async def _in_session[T](self, resolve: Callable[[], Awaitable[T]]) -> T:
        """Keep every endpoint open while ``resolve`` runs."""

        async with AsyncExitStack() as stack:
            for endpoint in self.endpoints:
                await stack.enter_async_context(endpoint)
            return await resolve()

    async def _resolve_platform_catalog_async(
        self, version: str | None
    ) -> PlatformCatalog | None:
        results = await gather_in_order(
            (endpoint.resolve_platform_catalog(version) for endpoint in self.endpoints)
        )
        catalogs = [catalog for catalog in results if catalog is not None and not catalog.is_empty]
        if not catalogs:
            return None
        if len(catalogs) == 1:
            return catalogs[0]
        return merge_platform_catalogs(catalogs)

    async def _resolve_for_version_async(self, version: str | None) -> ExtensionCatalog:
        if not self.endpoints:
            raise NoRegistriesError
        visited: EndpointsByVersion = {}
        walker = VersionGraphWalker(self._endpoints_for_version)

        if version is not None:
            catalogs = await walker.walk(version, visited=visited)
        elif len(self.endpoints) == 1:
            catalogs = await self._resolve_single_registry(walker, visited)
        else:
            default_platform = await self.endpoints[0].resolve_default_platform()
            catalogs = await walker.walk(default_platform.runtime_core_version, visited=visited)

        return await self._merge_with_non_platform_extensions(visited, catalogs)

    async def _resolve_single_registry(
        self,
        walker: VersionGraphWalker,
        visited: EndpointsByVersion,
    ) -> list[ExtensionCatalog]:
        registry = self.endpoints[0]
        platform_catalog = await registry.resolve_platform_catalog()
        if platform_catalog is None or platform_catalog.is_empty:
            raise EmptyPlatformCatalogError(registry.id)

        default_platform = platform_catalog.default()
        seed_version = (
            default_platform.runtime_core_version
            if default_platform is not None
            else platform_catalog.platforms[0].runtime_core_version
        )
        common_versions = {platform.runtime_core_version for platform in platform_catalog.platforms}
        if len(common_versions) != 1 or self._endpoints_for_version(seed_version) != (registry,):
            return await walker.walk(seed_version, visited=visited)

        # Every platform is aligned on the seed version: the unscoped catalog is
        # already the version-scoped one, so skip re-querying it.
        visited[seed_version] = (registry,)
        log.debug("All platforms of %s are aligned on %s", registry.id, seed_version)
        catalogs = list(
            await gather_in_order(
                (
                    registry.resolve_platform_extensions(platform.bom)
                    for platform in platform_catalog.platforms
                )
            )
        )
        upstream_versions = [
            platform.upstream_runtime_core_version
            for platform in platform_catalog.platforms
            if platform.upstream_runtime_core_version is not None
        ]
        catalogs.extend(await walker.walk(*upstream_versions, visited=visited))
        return catalogs

    async def _resolve_for_platforms_async(
        self, platforms: tuple[ArtifactCoords, ...]
    ) -> ExtensionCatalog:
        candidates = [
            filter_endpoints(
                self.endpoints,
                lambda endpoint, bom=bom: endpoint.classify_platform(bom),
                subject=platform_subject(bom),
            )
            for bom in platforms
        ]
        resolved = await gather_in_order(
            (
                self._resolve_platform_extensions(bom, endpoints)
                for bom, endpoints in zip(platforms, candidates, strict=True)
            )
        )

        catalogs: list[ExtensionCatalog] = []
        visited: EndpointsByVersion = {}
        for catalog in resolved:
            if catalog is None:
                continue
            catalogs.append(catalog)
            # only the first resolved platform seeds the runtime core version
            versions = [catalog.upstream_runtime_core_version]
            if len(catalogs) == 1:
                versions.insert(0, catalog.runtime_core_version)
            for version in versions:
                if version is not None and version not in visited:
                    visited[version] = self._endpoints_for_version(version)

        return await self._merge_with_non_platform_extensions(visited, catalogs)

    async def _resolve_platform_extensions(
        self,
        bom: ArtifactCoords,
        endpoints: tuple[RegistryEndpoint, ...],
    ) -> ExtensionCatalog | None:
        if not endpoints:
            log.debug("None of the configured registries recognizes platform %s", bom)
            return None
        for endpoint in endpoints:
            try:
                return await endpoint.resolve_platform_extensions(bom)
            except EndpointResolutionError as exc:
                log.debug("Registry %s failed to resolve platform %s: %s", endpoint.id, bom, exc)
        log.warning(
            "Failed to resolve platform %s using the following registries: %s",
            bom,
            ", ".join(endpoint.id for endpoint in endpoints),
        )
        return None

    async def _merge_with_non_platform_extensions(
        self,
        visited: EndpointsByVersion,
        catalogs: list[ExtensionCatalog],
    ) -> ExtensionCatalog:
        queries = [
            (version, endpoint) for version, endpoints in visited.items() for endpoint in endpoints
        ]
        non_platform = await gather_in_order(
            (endpoint.resolve_non_platform_extensions(version) for version, endpoint in queries)
        )
        catalogs.extend(catalog for catalog in non_platform if catalog is not None)
        return self.merger(catalogs)

    def _endpoints_for_version(self, version: str) -> tuple[RegistryEndpoint, ...]:
        return filter_endpoints(
            self.endpoints,
            lambda endpoint: endpoint.classify_runtime_version(version),
            subject=runtime_version_subject(version),
        )

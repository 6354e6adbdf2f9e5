"""Breadth-first walk over runtime core versions linked by upstream declarations.

Nodes are runtime core versions, edges are discovered lazily: a platform aligned
to version ``A`` that declares upstream version ``B`` links ``A`` to ``B``. Each
version is assigned its authoritative registries exactly once; the resulting
mapping doubles as the visited set, so cyclic upstream links terminate.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .fanout import gather_in_order

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from extcat.domain.model import ExtensionCatalog, Platform, PlatformCatalog
    from extcat.domain.ports import RegistryEndpoint

log = getLogger(__name__)

type EndpointsByVersion = dict[str, tuple[RegistryEndpoint, ...]]


@dataclass(slots=True)
class VersionGraphWalker:
    """Collect platform extension catalogs reachable from a runtime core version."""

    endpoints_for_version: Callable[[str], tuple[RegistryEndpoint, ...]]

    async def walk(
        self,
        *start_versions: str,
        visited: EndpointsByVersion,
    ) -> list[ExtensionCatalog]:
        """Walk from ``start_versions``, recording every visited version in ``visited``.

        Versions already present in ``visited`` are never queried again. Failures
        raised by endpoints propagate; a registry without platforms for a version
        simply contributes nothing.
        """

        collected: list[ExtensionCatalog] = []
        frontier = _unvisited(start_versions, visited)
        while frontier:
            for version in frontier:
                visited[version] = self.endpoints_for_version(version)
            log.debug("Resolving platforms for runtime core versions %s", ", ".join(frontier))

            queries = [
                (version, endpoint) for version in frontier for endpoint in visited[version]
            ]
            platform_catalogs = await gather_in_order(
                (endpoint.resolve_platform_catalog(version) for version, endpoint in queries)
            )

            found: list[tuple[RegistryEndpoint, Platform]] = []
            for (version, endpoint), catalog in zip(queries, platform_catalogs, strict=True):
                found.extend((endpoint, platform) for platform in _platforms(catalog))
                if catalog is None or catalog.is_empty:
                    log.debug("Registry %s has no platforms for %s", endpoint.id, version)

            extension_catalogs = await gather_in_order(
                (
                    endpoint.resolve_platform_extensions(platform.bom)
                    for endpoint, platform in found
                )
            )
            collected.extend(extension_catalogs)

            frontier = _unvisited(
                (
                    platform.upstream_runtime_core_version
                    for _, platform in found
                    if platform.upstream_runtime_core_version is not None
                ),
                visited,
            )
        return collected


def _platforms(catalog: PlatformCatalog | None) -> tuple[Platform, ...]:
    return () if catalog is None else catalog.platforms


def _unvisited(versions: Iterable[str], visited: EndpointsByVersion) -> tuple[str, ...]:
    # dict keeps first-seen order, which keeps the walk deterministic
    return tuple(dict.fromkeys(version for version in versions if version not in visited))

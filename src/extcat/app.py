"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from extcat.adapters.registry import build_registry_endpoint
from extcat.config import RegistriesConfig, RegistryConfig, get_registries_config
from extcat.domain.errors import EndpointConstructionError
from extcat.domain.ports import RegistryEndpoint
from extcat.domain.resolution import CatalogResolver, merge_extension_catalogs

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extcat.domain.model import ArtifactCoords, ExtensionCatalog, PlatformCatalog
    from extcat.domain.ports import CatalogMerger

EndpointFactory = Callable[[RegistryConfig], RegistryEndpoint]


log = getLogger(__name__)


def build_catalog_resolver(
    config: RegistriesConfig | None = None,
    *,
    endpoint_factory: EndpointFactory | None = None,
    merger: CatalogMerger | None = None,
) -> CatalogResolver:
    """Build a resolver over every enabled registry that can be constructed.

    Disabled registries and registries whose endpoint fails to construct are
    skipped. Ending up with no endpoint is not an error here; resolving extensions
    with such a resolver is.
    """

    effective_config = config or get_registries_config()
    factory = endpoint_factory or build_registry_endpoint

    endpoints: list[RegistryEndpoint] = []
    for registry in effective_config.registries:
        if registry.disabled:
            log.debug("Skipping disabled registry %s", registry.id)
            continue
        try:
            endpoints.append(factory(registry))
        except EndpointConstructionError as exc:
            log.warning("Skipping registry %s: %s", registry.id, exc)

    log.debug("Using registries: %s", ", ".join(endpoint.id for endpoint in endpoints) or "none")
    return CatalogResolver(
        endpoints=tuple(endpoints),
        merger=merger or merge_extension_catalogs,
    )


def resolve_platform_catalog(
    *,
    version: str | None = None,
    resolver: CatalogResolver | None = None,
) -> PlatformCatalog | None:
    """Resolve the platforms offered by the configured registries."""

    effective_resolver = resolver or build_catalog_resolver()
    catalog = effective_resolver.resolve_platform_catalog(version)
    if catalog is None:
        log.info("No registry provides platforms for %s", version or "any runtime core version")
    else:
        log.info("Resolved %s platforms", len(catalog.platforms))
    return catalog


def resolve_extension_catalog(
    *,
    version: str | None = None,
    platforms: Sequence[ArtifactCoords] | None = None,
    resolver: CatalogResolver | None = None,
) -> ExtensionCatalog:
    """Resolve the extension catalog for a runtime core version or explicit platforms."""

    effective_resolver = resolver or build_catalog_resolver()
    log.info(
        "Resolving extension catalog: version=%s, platforms=%s",
        version,
        ", ".join(str(bom) for bom in platforms) if platforms else None,
    )
    catalog = effective_resolver.resolve_extension_catalog(version, platforms=platforms)
    log.info(
        f"Finished resolving extension catalog: extensions={len(catalog.extensions)}, "
        f"runtime_core_version={catalog.runtime_core_version}"
    )
    return catalog

"""Default merge of partial extension catalogs."""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from extcat.domain.model import ExtensionCatalog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extcat.domain.model import ArtifactKey, Category, Extension


def merge_extension_catalogs(catalogs: Sequence[ExtensionCatalog]) -> ExtensionCatalog:
    """Fold ``catalogs`` into one, earlier catalogs taking precedence.

    Identity and version fields come from the first catalog (the upstream version
    from the first one declaring it), the BOM from the first platform catalog.
    Extensions are unique by artifact key; a duplicate only adds its catalog id to
    the surviving extension's ``origins``.
    """

    if not catalogs:
        return ExtensionCatalog(id="", runtime_core_version=None)

    first = catalogs[0]
    upstream = next(
        (
            catalog.upstream_runtime_core_version
            for catalog in catalogs
            if catalog.upstream_runtime_core_version is not None
        ),
        None,
    )
    bom = next((catalog.bom for catalog in catalogs if catalog.platform), None)

    extensions: dict[ArtifactKey, Extension] = {}
    categories: dict[str, Category] = {}
    metadata: dict[str, object] = {}
    for catalog in catalogs:
        for extension in catalog.extensions:
            key = extension.artifact.key
            existing = extensions.get(key)
            if existing is None:
                extensions[key] = _with_origin(extension, catalog.id)
            elif catalog.id and catalog.id not in existing.origins:
                extensions[key] = replace(existing, origins=(*existing.origins, catalog.id))
        for category in catalog.categories:
            categories.setdefault(category.id, category)
        for name, value in catalog.metadata.items():
            metadata.setdefault(name, value)

    return ExtensionCatalog(
        id=first.id,
        runtime_core_version=first.runtime_core_version,
        upstream_runtime_core_version=upstream,
        bom=bom,
        platform=any(catalog.platform for catalog in catalogs),
        extensions=tuple(extensions.values()),
        categories=tuple(categories.values()),
        metadata=MappingProxyType(metadata),
    )


def _with_origin(extension: Extension, catalog_id: str) -> Extension:
    if not catalog_id or catalog_id in extension.origins:
        return extension
    return replace(extension, origins=(*extension.origins, catalog_id))

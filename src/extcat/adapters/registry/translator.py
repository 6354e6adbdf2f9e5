"""Translate registry documents to domain catalogs and back."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from extcat.domain.model import (
    ArtifactCoords,
    Category,
    Extension,
    ExtensionCatalog,
    Platform,
    PlatformCatalog,
)

from .schema import (
    CategoryPayload,
    ExtensionCatalogPayload,
    ExtensionPayload,
    PlatformCatalogPayload,
    PlatformPayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def parse_platform_catalog(payload: Mapping[str, object]) -> PlatformCatalog:
    return translate_platform_catalog(PlatformCatalogPayload.model_validate(payload))


def parse_extension_catalog(payload: Mapping[str, object]) -> ExtensionCatalog:
    return translate_extension_catalog(ExtensionCatalogPayload.model_validate(payload))


def translate_platform_catalog(model: PlatformCatalogPayload) -> PlatformCatalog:
    default = model.default_platform
    return PlatformCatalog(
        platforms=tuple(
            Platform(
                bom=ArtifactCoords.from_string(platform.bom),
                runtime_core_version=platform.runtime_core_version,
                upstream_runtime_core_version=platform.upstream_runtime_core_version,
            )
            for platform in model.platforms
        ),
        default_platform=ArtifactCoords.from_string(default) if default else None,
    )


def translate_extension_catalog(model: ExtensionCatalogPayload) -> ExtensionCatalog:
    return ExtensionCatalog(
        id=model.id,
        runtime_core_version=model.runtime_core_version,
        upstream_runtime_core_version=model.upstream_runtime_core_version,
        bom=ArtifactCoords.from_string(model.bom) if model.bom else None,
        platform=model.platform,
        extensions=tuple(
            Extension(
                artifact=ArtifactCoords.from_string(extension.artifact),
                name=extension.name,
                description=extension.description,
                metadata=MappingProxyType(dict(extension.metadata)),
                origins=tuple(extension.origins),
            )
            for extension in model.extensions
        ),
        categories=tuple(
            Category(id=category.id, name=category.name, description=category.description)
            for category in model.categories
        ),
        metadata=MappingProxyType(dict(model.metadata)),
    )


def dump_platform_catalog(catalog: PlatformCatalog) -> dict[str, object]:
    model = PlatformCatalogPayload(
        default_platform=str(catalog.default_platform) if catalog.default_platform else None,
        platforms=[
            PlatformPayload(
                bom=str(platform.bom),
                runtime_core_version=platform.runtime_core_version,
                upstream_runtime_core_version=platform.upstream_runtime_core_version,
            )
            for platform in catalog.platforms
        ],
    )
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_extension_catalog(catalog: ExtensionCatalog) -> dict[str, object]:
    model = ExtensionCatalogPayload(
        id=catalog.id,
        bom=str(catalog.bom) if catalog.bom else None,
        platform=catalog.platform,
        runtime_core_version=catalog.runtime_core_version,
        upstream_runtime_core_version=catalog.upstream_runtime_core_version,
        extensions=[
            ExtensionPayload(
                artifact=str(extension.artifact),
                name=extension.name,
                description=extension.description,
                metadata=dict(extension.metadata),
                origins=list(extension.origins),
            )
            for extension in catalog.extensions
        ],
        categories=[
            CategoryPayload(id=category.id, name=category.name, description=category.description)
            for category in catalog.categories
        ],
        metadata=dict(catalog.metadata),
    )
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)

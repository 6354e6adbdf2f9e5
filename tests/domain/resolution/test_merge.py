from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType

from extcat.domain.model import Category, ExtensionCatalog
from extcat.domain.resolution import merge_extension_catalogs
from tests.support.registries import coords, extension_catalog


def test_merge_of_nothing_is_an_empty_catalog() -> None:
    merged = merge_extension_catalogs([])

    assert merged.id == ""
    assert merged.runtime_core_version is None
    assert merged.extensions == ()


def test_first_catalog_provides_identity_and_earlier_extensions_win() -> None:
    platform_catalog = extension_catalog(
        "acme-bom", "3.0", "io.acme:web:3.0", "io.acme:cli:3.0", bom="io.acme:bom:3.0"
    )
    non_platform = extension_catalog("community", "3.0", "io.acme:web:2.9", "org.other:ext:1.0")

    merged = merge_extension_catalogs([platform_catalog, non_platform])

    assert merged.id == "acme-bom"
    assert merged.runtime_core_version == "3.0"
    assert merged.bom == coords("io.acme:bom:3.0")
    assert merged.platform is True
    assert [str(extension.artifact) for extension in merged.extensions] == [
        "io.acme:web:3.0",
        "io.acme:cli:3.0",
        "org.other:ext:1.0",
    ]
    web = merged.extensions[0]
    assert web.origins == ("acme-bom", "community")


def test_bom_comes_from_first_platform_catalog() -> None:
    non_platform = extension_catalog("community", "3.0", upstream="2.0")
    platform_catalog = extension_catalog("acme-bom", "3.0", bom="io.acme:bom:3.0")

    merged = merge_extension_catalogs([non_platform, platform_catalog])

    assert merged.id == "community"
    assert merged.bom == coords("io.acme:bom:3.0")
    assert merged.upstream_runtime_core_version == "2.0"


def test_categories_and_metadata_keep_first_definition() -> None:
    first = replace(
        extension_catalog("a", "3.0"),
        categories=(Category(id="web", name="Web"),),
        metadata=MappingProxyType({"maturity": "stable"}),
    )
    second = replace(
        extension_catalog("b", "3.0"),
        categories=(Category(id="web", name="Other"), Category(id="data", name="Data")),
        metadata=MappingProxyType({"maturity": "preview", "docs": "https://docs.example"}),
    )

    merged = merge_extension_catalogs([first, second])

    assert [category.name for category in merged.categories] == ["Web", "Data"]
    assert dict(merged.metadata) == {"maturity": "stable", "docs": "https://docs.example"}


def test_single_catalog_is_preserved() -> None:
    catalog = ExtensionCatalog(id="", runtime_core_version="3.0")

    merged = merge_extension_catalogs([catalog])

    assert merged.id == ""
    assert merged.runtime_core_version == "3.0"

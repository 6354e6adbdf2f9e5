from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from extcat.adapters.registry import LocalRegistryEndpoint
from extcat.config import RegistryConfig, RuntimeVersionsConfig
from extcat.domain.errors import EndpointConstructionError, EndpointResolutionError
from extcat.domain.model import ArtifactCoords, Classification


def _write_json(path: Path, document: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")


@pytest.fixture
def registry_root(tmp_path: Path) -> Path:
    root = tmp_path / "mirror"
    _write_json(
        root / "platforms.json",
        {
            "default-platform": "io.acme:bom:3.0",
            "platforms": [{"bom": "io.acme:bom:3.0", "runtime-core-version": "3.0"}],
        },
    )
    _write_json(
        root / "platforms" / "2.0.json",
        {"platforms": [{"bom": "io.acme:bom:2.0", "runtime-core-version": "2.0"}]},
    )
    _write_json(
        root / "platform-extensions" / "io.acme" / "bom" / "jar" / "3.0.json",
        {
            "id": "io.acme:bom:3.0",
            "bom": "io.acme:bom:3.0",
            "platform": True,
            "runtime-core-version": "3.0",
            "extensions": [
                {
                    "artifact": "io.acme:web:3.0",
                    "name": "Web",
                    "metadata": {"maturity": "stable"},
                }
            ],
            "categories": [{"id": "web", "name": "Web"}],
        },
    )
    _write_json(
        root / "non-platform-extensions" / "3.0.json",
        {"id": "community", "runtime-core-version": "3.0", "unknown-key": 1},
    )
    return root


@pytest.fixture
def endpoint(registry_root: Path) -> LocalRegistryEndpoint:
    return LocalRegistryEndpoint(config=RegistryConfig(id="mirror", path=registry_root))


def test_missing_directory_fails_construction(tmp_path: Path) -> None:
    with pytest.raises(EndpointConstructionError, match="does not exist"):
        LocalRegistryEndpoint(config=RegistryConfig(id="mirror", path=tmp_path / "absent"))


def test_unscoped_and_scoped_platform_catalogs(endpoint: LocalRegistryEndpoint) -> None:
    current = asyncio.run(endpoint.resolve_platform_catalog())
    previous = asyncio.run(endpoint.resolve_platform_catalog("2.0"))

    assert current is not None
    assert [str(platform.bom) for platform in current.platforms] == ["io.acme:bom:3.0"]
    assert previous is not None
    assert previous.default_platform is None
    assert previous.default() == previous.platforms[0]
    assert asyncio.run(endpoint.resolve_platform_catalog("9.9")) is None


def test_default_platform(endpoint: LocalRegistryEndpoint) -> None:
    default = asyncio.run(endpoint.resolve_default_platform())

    assert default.bom == ArtifactCoords.from_string("io.acme:bom:3.0")


def test_platform_extensions_are_read_from_bom_path(endpoint: LocalRegistryEndpoint) -> None:
    catalog = asyncio.run(
        endpoint.resolve_platform_extensions(ArtifactCoords.from_string("io.acme:bom:3.0"))
    )

    assert catalog.bom == ArtifactCoords.from_string("io.acme:bom:3.0")
    (extension,) = catalog.extensions
    assert extension.metadata["maturity"] == "stable"
    assert [category.id for category in catalog.categories] == ["web"]


def test_unknown_platform_is_an_error(endpoint: LocalRegistryEndpoint) -> None:
    with pytest.raises(EndpointResolutionError, match="does not provide platform"):
        asyncio.run(
            endpoint.resolve_platform_extensions(ArtifactCoords.from_string("io.acme:bom:9.9"))
        )


def test_non_platform_extensions(endpoint: LocalRegistryEndpoint) -> None:
    catalog = asyncio.run(endpoint.resolve_non_platform_extensions("3.0"))

    assert catalog is not None
    assert catalog.id == "community"
    assert catalog.platform is False
    assert asyncio.run(endpoint.resolve_non_platform_extensions("2.0")) is None


def test_malformed_document_is_an_error(
    registry_root: Path, endpoint: LocalRegistryEndpoint
) -> None:
    (registry_root / "platforms" / "4.0.json").write_text("{", encoding="utf-8")
    _write_json(registry_root / "platforms" / "5.0.json", {"platforms": [{"bom": "x"}]})

    with pytest.raises(EndpointResolutionError, match="failed to read"):
        asyncio.run(endpoint.resolve_platform_catalog("4.0"))
    with pytest.raises(EndpointResolutionError, match="malformed"):
        asyncio.run(endpoint.resolve_platform_catalog("5.0"))


@pytest.mark.parametrize("version", ["..", "../3.0", "a/b"])
def test_versions_cannot_escape_registry_root(
    endpoint: LocalRegistryEndpoint, version: str
) -> None:
    with pytest.raises(EndpointResolutionError, match="cannot map"):
        asyncio.run(endpoint.resolve_non_platform_extensions(version))


def test_runtime_version_classification(registry_root: Path) -> None:
    endpoint = LocalRegistryEndpoint(
        config=RegistryConfig(
            id="mirror",
            path=registry_root,
            runtime_versions=RuntimeVersionsConfig(
                recognized_versions_expression=r"3\..*", exclusive_provider=True
            ),
        )
    )

    assert endpoint.classify_runtime_version("3.1") is Classification.EXCLUSIVE_PROVIDER
    assert endpoint.classify_runtime_version("2.0") is Classification.NOT_RECOGNIZED


def test_classifier_and_type_select_distinct_documents(
    registry_root: Path, endpoint: LocalRegistryEndpoint
) -> None:
    base = registry_root / "platform-extensions" / "io.acme" / "bom"
    _write_json(base / "pom" / "3.0.json", {"id": "pom-bom", "runtime-core-version": "3.0"})
    _write_json(
        base / "pom" / "native" / "3.0.json",
        {"id": "native-pom-bom", "runtime-core-version": "3.0"},
    )

    def catalog_id(coords: str) -> str:
        bom = ArtifactCoords.from_string(coords)
        return asyncio.run(endpoint.resolve_platform_extensions(bom)).id

    assert catalog_id("io.acme:bom:3.0") == "io.acme:bom:3.0"
    assert catalog_id("io.acme:bom::pom:3.0") == "pom-bom"
    assert catalog_id("io.acme:bom:native:pom:3.0") == "native-pom-bom"
    with pytest.raises(EndpointResolutionError, match="does not provide platform"):
        asyncio.run(
            endpoint.resolve_platform_extensions(
                ArtifactCoords.from_string("io.acme:bom:native:3.0")
            )
        )

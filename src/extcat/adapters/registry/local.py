"""Registry endpoint backed by a directory mirror of registry documents.

Layout, relative to the registry root:

    platforms.json
    platforms/<runtime-core-version>.json
    platform-extensions/<group-id>/<artifact-id>/<type>/<version>.json
    platform-extensions/<group-id>/<artifact-id>/<type>/<classifier>/<version>.json
    non-platform-extensions/<runtime-core-version>.json
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Self

from extcat.domain.errors import EndpointConstructionError, EndpointResolutionError

from .recognition import classify_platform, classify_runtime_version
from .translator import parse_extension_catalog, parse_platform_catalog

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from extcat.config.registries import RegistryConfig
    from extcat.domain.model import (
        ArtifactCoords,
        Classification,
        ExtensionCatalog,
        Platform,
        PlatformCatalog,
    )

log = getLogger(__name__)


class LocalRegistryEndpoint:
    def __init__(self, *, config: RegistryConfig) -> None:
        if config.path is None:
            raise EndpointConstructionError(
                f"Registry {config.id} has no path", registry_id=config.id
            )
        if not config.path.is_dir():
            raise EndpointConstructionError(
                f"Registry {config.id} directory does not exist: {config.path}",
                registry_id=config.id,
            )
        self._config = config
        self._root = config.path

    def __repr__(self) -> str:
        return f"LocalRegistryEndpoint(id={self.id!r}, path={str(self._root)!r})"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None

    @property
    def id(self) -> str:
        return self._config.id

    def classify_platform(self, bom: ArtifactCoords) -> Classification:
        return classify_platform(self._config, bom)

    def classify_runtime_version(self, version: str) -> Classification:
        return classify_runtime_version(self._config, version)

    async def resolve_platform_catalog(self, version: str | None = None) -> PlatformCatalog | None:
        document = (
            self._root / "platforms.json"
            if version is None
            else self._root / "platforms" / f"{self._segment(version)}.json"
        )
        payload = self._read(document)
        if payload is None:
            return None
        try:
            return parse_platform_catalog(payload)
        except ValueError as exc:
            raise self._malformed(document, exc) from exc

    async def resolve_default_platform(self) -> Platform:
        catalog = await self.resolve_platform_catalog()
        default = catalog.default() if catalog is not None else None
        if default is None:
            raise EndpointResolutionError(
                f"Registry {self.id} does not recommend a default platform",
                registry_id=self.id,
            )
        return default

    async def resolve_platform_extensions(self, bom: ArtifactCoords) -> ExtensionCatalog:
        document = (
            self._root
            / "platform-extensions"
            / self._segment(bom.group_id)
            / self._segment(bom.artifact_id)
            / self._segment(bom.type)
        )
        if bom.classifier:
            document /= self._segment(bom.classifier)
        document /= f"{self._segment(bom.version)}.json"
        payload = self._read(document)
        if payload is None:
            raise EndpointResolutionError(
                f"Registry {self.id} does not provide platform {bom}", registry_id=self.id
            )
        try:
            return parse_extension_catalog(payload)
        except ValueError as exc:
            raise self._malformed(document, exc) from exc

    async def resolve_non_platform_extensions(self, version: str) -> ExtensionCatalog | None:
        document = self._root / "non-platform-extensions" / f"{self._segment(version)}.json"
        payload = self._read(document)
        if payload is None:
            return None
        try:
            return parse_extension_catalog(payload)
        except ValueError as exc:
            raise self._malformed(document, exc) from exc

    def _read(self, document: Path) -> dict[str, object] | None:
        if not document.is_file():
            log.debug("Registry %s has no %s", self.id, document)
            return None
        try:
            payload = json.loads(document.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise EndpointResolutionError(
                f"Registry {self.id} failed to read {document}: {exc}", registry_id=self.id
            ) from exc
        if not isinstance(payload, dict):
            raise EndpointResolutionError(
                f"Unexpected registry document {document}", registry_id=self.id
            )
        return payload

    def _malformed(self, document: Path, exc: ValueError) -> EndpointResolutionError:
        return EndpointResolutionError(
            f"Registry {self.id} document {document} is malformed: {exc}", registry_id=self.id
        )

    def _segment(self, value: str) -> str:
        if not value or value in {".", ".."} or "/" in value or "\\" in value:
            raise EndpointResolutionError(
                f"Registry {self.id} cannot map {value!r} to a document path",
                registry_id=self.id,
            )
        return value

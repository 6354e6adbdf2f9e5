"""Registry endpoint backed by an HTTP catalog service."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final, Self
from urllib.parse import quote

import httpx

from extcat import __version__
from extcat.adapters.http_resilience import ResilientClient
from extcat.config.http_resilience import CacheConfig, ResilienceConfig
from extcat.domain.errors import EndpointResolutionError

from .recognition import classify_platform, classify_runtime_version
from .translator import parse_extension_catalog, parse_platform_catalog

if TYPE_CHECKING:
    from collections.abc import Callable
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

USER_AGENT: Final[str] = f"extcat/{__version__}"

type JsonDocument = dict[str, object]


def resilience_for(config: RegistryConfig) -> ResilienceConfig:
    """Derive the HTTP client settings of one registry."""

    if config.url is None:
        raise ValueError(f"Registry {config.id} has no url")
    cache = None if config.cache == "off" else CacheConfig(backend=config.cache)
    return ResilienceConfig(
        name=config.id,
        base_url=config.url,
        timeout_seconds=config.timeout_seconds,
        cache=cache,
        default_headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    )


class HttpRegistryEndpoint:
    """Answer catalog queries from a registry's JSON HTTP API.

    Inside ``async with endpoint:`` every query goes through one client, so the
    response cache and the rate limit span the whole session. Outside a session
    each query opens a client of its own.
    """

    def __init__(
        self,
        *,
        config: RegistryConfig,
        resilience: ResilienceConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = resilience or resilience_for(config)
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    def __repr__(self) -> str:
        return f"HttpRegistryEndpoint(id={self.id!r}, url={self._config.url!r})"

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    @property
    def id(self) -> str:
        return self._config.id

    def classify_platform(self, bom: ArtifactCoords) -> Classification:
        return classify_platform(self._config, bom)

    def classify_runtime_version(self, version: str) -> Classification:
        return classify_runtime_version(self._config, version)

    async def resolve_platform_catalog(self, version: str | None = None) -> PlatformCatalog | None:
        path = "platforms" if version is None else f"platforms/{quote(version, safe='')}"
        payload = await self._get_json(path, missing_ok=True)
        if payload is None:
            return None
        return self._decode(parse_platform_catalog, payload, what=f"platform catalog {path}")

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
        payload = await self._get_json(
            "platform-extensions", params={"bom": str(bom)}, missing_ok=False
        )
        if payload is None:
            raise EndpointResolutionError(
                f"Registry {self.id} does not provide platform {bom}", registry_id=self.id
            )
        return self._decode(parse_extension_catalog, payload, what=f"platform {bom}")

    async def resolve_non_platform_extensions(self, version: str) -> ExtensionCatalog | None:
        path = f"non-platform-extensions/{quote(version, safe='')}"
        payload = await self._get_json(path, missing_ok=True)
        if payload is None:
            return None
        return self._decode(parse_extension_catalog, payload, what=f"non-platform catalog {path}")

    async def _get_json(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        missing_ok: bool,
    ) -> JsonDocument | None:
        try:
            response = await self._get(path, params=params)
            if response.status_code == httpx.codes.NOT_FOUND and missing_ok:
                log.debug("Registry %s has no %s", self.id, path)
                return None
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise EndpointResolutionError(
                f"Registry {self.id} request for {path} failed: {exc}", registry_id=self.id
            ) from exc
        except ValueError as exc:
            raise EndpointResolutionError(
                f"Registry {self.id} returned invalid JSON for {path}", registry_id=self.id
            ) from exc

        if not isinstance(payload, dict):
            raise EndpointResolutionError(
                f"Unexpected registry response payload for {path}", registry_id=self.id
            )
        return payload

    async def _get(self, path: str, *, params: dict[str, str] | None) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(path, params=params)
        async with self._client_factory(self._resilience) as client:
            return await client.get(path, params=params)

    def _decode[T](
        self, parse: Callable[[JsonDocument], T], payload: JsonDocument, *, what: str
    ) -> T:
        try:
            return parse(payload)
        except ValueError as exc:
            raise EndpointResolutionError(
                f"Registry {self.id} returned a malformed {what}: {exc}", registry_id=self.id
            ) from exc

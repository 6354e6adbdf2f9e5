"""Registry configuration: which registries to consult and how they classify queries."""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field, replace
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final, Literal, cast

from .env import env_flag, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .storage import default_config_dir

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

CONFIG_FILENAME: Final[str] = "registries.toml"
DEFAULT_REGISTRY_ID: Final[str] = "default"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

type CacheMode = Literal["memory", "sqlite", "off"]
_CACHE_MODES: Final[frozenset[str]] = frozenset({"memory", "sqlite", "off"})


@dataclass(frozen=True, slots=True)
class PlatformsConfig:
    recognized_group_ids: tuple[str, ...] = ()
    exclusive_provider: bool = False

    def recognizes(self, group_id: str) -> bool:
        return not self.recognized_group_ids or group_id in self.recognized_group_ids


@dataclass(frozen=True, slots=True)
class RuntimeVersionsConfig:
    recognized_versions_expression: str | None = None
    exclusive_provider: bool = False
    _pattern: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.recognized_versions_expression is None:
            return
        try:
            pattern = re.compile(self.recognized_versions_expression)
        except re.error as exc:
            raise ConfigurationError(
                "Invalid recognized-versions-expression "
                f"{self.recognized_versions_expression!r}: {exc}"
            ) from exc
        object.__setattr__(self, "_pattern", pattern)

    def recognizes(self, version: str) -> bool:
        if self._pattern is None:
            return True
        return self._pattern.fullmatch(version) is not None


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """One configured registry, enabled or not."""

    id: str
    url: str | None = None
    path: Path | None = None
    disabled: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    cache: CacheMode = "memory"
    platforms: PlatformsConfig | None = None
    runtime_versions: RuntimeVersionsConfig | None = None


@dataclass(frozen=True, slots=True)
class RegistriesConfig:
    """Ordered registry list; order defines precedence."""

    registries: tuple[RegistryConfig, ...] = ()
    debug: bool = False
    source: Path | None = None

    @property
    def enabled(self) -> tuple[RegistryConfig, ...]:
        return tuple(registry for registry in self.registries if not registry.disabled)


def default_config_path() -> Path:
    return default_config_dir() / CONFIG_FILENAME


def get_registries_config(*, path: Path | None = None) -> RegistriesConfig:
    """Locate and load the registry configuration.

    Lookup order: explicit ``path``, ``EXTCAT_CONFIG``, the per-user config file,
    then a single registry from ``EXTCAT_REGISTRY_URL``. No source at all yields an
    empty configuration.
    """

    debug = env_flag("EXTCAT_DEBUG")
    env_path = optional_env_var("EXTCAT_CONFIG")
    if path is None and env_path is not None:
        path = Path(env_path)
    if path is not None and not path.is_file():
        raise MissingConfigurationError(path)
    if path is None and default_config_path().is_file():
        path = default_config_path()

    if path is not None:
        config = load_registries_config(path)
        return replace(config, debug=True) if debug else config

    url = optional_env_var("EXTCAT_REGISTRY_URL")
    if url is not None:
        return RegistriesConfig(
            registries=(RegistryConfig(id=DEFAULT_REGISTRY_ID, url=url),),
            debug=debug,
        )

    log.debug("No registry configuration found")
    return RegistriesConfig(debug=debug)


def load_registries_config(path: Path) -> RegistriesConfig:
    """Load ``path``; every ``ConfigurationError`` raised names the file."""

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"invalid TOML: {exc}", source=path) from exc
    try:
        return parse_registries_config(document, source=path)
    except ConfigurationError as exc:
        if exc.source is not None:
            raise
        raise ConfigurationError(str(exc), source=path) from exc


def parse_registries_config(
    document: Mapping[str, object],
    *,
    source: Path | None = None,
) -> RegistriesConfig:
    debug = _bool(document, "debug", context="configuration")
    raw_registries = document.get("registries", [])
    if not isinstance(raw_registries, list):
        raise ConfigurationError("'registries' must be an array of tables")

    registries: list[RegistryConfig] = []
    seen: set[str] = set()
    for index, raw in enumerate(cast(list[object], raw_registries)):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Registry entry #{index} must be a table")
        registry = _parse_registry(cast(dict[str, object], raw), index=index, source=source)
        if registry.id in seen:
            raise ConfigurationError(f"Duplicate registry id: {registry.id}")
        seen.add(registry.id)
        registries.append(registry)

    return RegistriesConfig(registries=tuple(registries), debug=debug, source=source)


def _parse_registry(
    raw: Mapping[str, object],
    *,
    index: int,
    source: Path | None,
) -> RegistryConfig:
    registry_id = _str(raw, "id", context=f"registry #{index}")
    if registry_id is None:
        raise ConfigurationError(f"Registry entry #{index} is missing an 'id'")
    context = f"registry {registry_id}"

    raw_path = _str(raw, "path", context=context)
    path: Path | None = None
    if raw_path is not None:
        path = Path(raw_path).expanduser()
        if not path.is_absolute() and source is not None:
            path = source.parent / path

    cache = _str(raw, "cache", context=context) or "memory"
    if cache not in _CACHE_MODES:
        raise ConfigurationError(f"Unsupported cache mode for {context}: {cache}")

    timeout = raw.get("timeout-seconds", DEFAULT_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
        raise ConfigurationError(f"'timeout-seconds' must be a positive number for {context}")

    return RegistryConfig(
        id=registry_id,
        url=_str(raw, "url", context=context),
        path=path,
        disabled=_bool(raw, "disabled", context=context),
        timeout_seconds=float(timeout),
        cache=cast("CacheMode", cache),
        platforms=_parse_platforms(raw.get("platforms"), context=context),
        runtime_versions=_parse_runtime_versions(raw.get("runtime-versions"), context=context),
    )


def _parse_platforms(raw: object, *, context: str) -> PlatformsConfig | None:
    if raw is None:
        return None
    table = _table(raw, name="platforms", context=context)
    group_ids = table.get("recognized-group-ids", [])
    if not isinstance(group_ids, list) or not all(
        isinstance(item, str) for item in cast(list[object], group_ids)
    ):
        raise ConfigurationError(f"'recognized-group-ids' must be a list of strings for {context}")
    return PlatformsConfig(
        recognized_group_ids=tuple(cast(list[str], group_ids)),
        exclusive_provider=_bool(table, "exclusive-provider", context=context),
    )


def _parse_runtime_versions(raw: object, *, context: str) -> RuntimeVersionsConfig | None:
    if raw is None:
        return None
    table = _table(raw, name="runtime-versions", context=context)
    return RuntimeVersionsConfig(
        recognized_versions_expression=_str(
            table, "recognized-versions-expression", context=context
        ),
        exclusive_provider=_bool(table, "exclusive-provider", context=context),
    )


def _table(raw: object, *, name: str, context: str) -> Mapping[str, object]:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"'{name}' must be a table for {context}")
    return cast(dict[str, object], raw)


def _str(raw: Mapping[str, object], key: str, *, context: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"'{key}' must be a non-empty string for {context}")
    return value.strip()


def _bool(raw: Mapping[str, object], key: str, *, context: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a boolean for {context}")
    return value


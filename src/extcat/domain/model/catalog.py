"""Platform and extension catalog value objects.

Everything here is immutable and created fresh per resolution call. Registries
produce these objects, the resolution package combines them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .coords import ArtifactCoords, ArtifactKey


def _empty_mapping() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Platform:
    """One platform release: a BOM aligned to a runtime core version."""

    bom: ArtifactCoords
    runtime_core_version: str
    upstream_runtime_core_version: str | None = None


@dataclass(frozen=True, slots=True)
class PlatformCatalog:
    """Ordered platform releases plus the BOM of the recommended default."""

    platforms: tuple[Platform, ...] = ()
    default_platform: ArtifactCoords | None = None

    @property
    def is_empty(self) -> bool:
        return not self.platforms

    def default(self) -> Platform | None:
        """Return the default platform, or the first one when no default matches."""

        if not self.platforms:
            return None
        for platform in self.platforms:
            if platform.bom == self.default_platform:
                return platform
        return self.platforms[0]

    def platform_keys(self) -> tuple[ArtifactKey, ...]:
        return tuple(platform.bom.key for platform in self.platforms)


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Extension:
    """Extension metadata; ``origins`` lists the ids of contributing catalogs."""

    artifact: ArtifactCoords
    name: str
    description: str | None = None
    metadata: Mapping[str, object] = field(default_factory=_empty_mapping)
    origins: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtensionCatalog:
    """Extensions available for one platform or one runtime core version."""

    id: str
    runtime_core_version: str | None
    upstream_runtime_core_version: str | None = None
    bom: ArtifactCoords | None = None
    platform: bool = False
    extensions: tuple[Extension, ...] = ()
    categories: tuple[Category, ...] = ()
    metadata: Mapping[str, object] = field(default_factory=_empty_mapping)

    def extension_keys(self) -> tuple[ArtifactKey, ...]:
        return tuple(extension.artifact.key for extension in self.extensions)
